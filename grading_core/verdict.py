# grading_core/verdict.py
from __future__ import annotations
from typing import Any

from . import config
from .validators import validate_passing_score


def decide(percentage: float, passing_score: Any) -> bool:
    p = validate_passing_score(passing_score)
    return float(percentage) >= p  # closed lower bound: equal passes


def performance_band(percentage: float) -> str:
    s = float(percentage)
    if s >= config.TOP_PERFORMER_MIN: return "top"
    if s < config.NEEDS_IMPROVEMENT_BELOW: return "needs_improvement"
    return "solid"
