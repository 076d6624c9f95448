from __future__ import annotations
import math
from typing import Any, Iterable, List

from . import config
from .errors import ConfigurationError
from .types import SCORING_TYPES, GradableItem
from .weights import check_weight


def validate_item(item: GradableItem) -> None:
    """Raise ConfigurationError if ``item`` cannot be graded deterministically."""
    iid = item.id
    if not isinstance(iid, str) or not iid.strip():
        raise ConfigurationError("item id must be a non-empty string", None)
    if item.scoring_type not in SCORING_TYPES:
        raise ConfigurationError(f"unknown scoring type {item.scoring_type!r}", iid)
    check_weight(item.weight, iid)
    check_weight(item.category_default_weight, iid, label="category default weight")

    t = item.scoring_type
    if t == "multipleChoice":
        if not item.options:
            raise ConfigurationError("multiple choice item has no options", iid)
        seen = set()
        for opt in item.options:
            if opt.id in seen:
                raise ConfigurationError(f"duplicate option id {opt.id!r}", iid)
            seen.add(opt.id)
        if item.allow_partial_credit and not item.correct_option_ids():
            raise ConfigurationError("partial credit needs at least one correct option", iid)
    elif t == "openText":
        if item.exact_answer is not None and not isinstance(item.exact_answer, str):
            raise ConfigurationError(f"exact answer must be a string, got {item.exact_answer!r}", iid)
        if not all(isinstance(w, str) for w in item.trigger_words):
            raise ConfigurationError("trigger words must be strings", iid)
        has_exact = bool((item.exact_answer or "").strip())
        has_triggers = any(isinstance(w, str) and w.strip() for w in item.trigger_words)
        if not has_exact and not has_triggers:
            raise ConfigurationError("open text item needs an exact answer or trigger words", iid)
    elif t == "points":
        check_weight(item.max_points, iid, label="max_points")
    elif t == "scale":
        if isinstance(item.scale_size, bool) or item.scale_size not in config.SCALE_SIZES:
            raise ConfigurationError(
                f"scale size must be one of {config.SCALE_SIZES}, got {item.scale_size!r}", iid
            )


def validate_items(items: Iterable[GradableItem]) -> List[GradableItem]:
    out: List[GradableItem] = []
    seen = set()
    for item in items:
        if not isinstance(item, GradableItem):
            raise ConfigurationError(f"expected GradableItem, got {type(item).__name__}")
        validate_item(item)
        if item.id in seen:
            raise ConfigurationError("duplicate item id", item.id)
        seen.add(item.id)
        out.append(item)
    return out


def validate_passing_score(value: Any) -> float:
    if value is None:
        raise ConfigurationError("passing score is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"passing score must be a number, got {value!r}")
    p = float(value)
    if not math.isfinite(p) or p < 0.0 or p > 100.0:
        raise ConfigurationError(f"passing score must be within 0..100, got {value!r}")
    return p
