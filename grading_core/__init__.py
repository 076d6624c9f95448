from .engine import EvaluationRunner, run
from .errors import ConfigurationError, ScoringError, ValidationError
from .triggers import match
from .types import EvaluationResult, GradableItem, ItemResult, Option

__all__ = [
    "ConfigurationError",
    "EvaluationResult",
    "EvaluationRunner",
    "GradableItem",
    "ItemResult",
    "Option",
    "ScoringError",
    "ValidationError",
    "match",
    "run",
]
