from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


DEFAULT_WEIGHT: float = 1.0
DEFAULT_MAX_POINTS: float = 10.0
DEFAULT_SCALE_SIZE: int = 5
SCALE_SIZES: tuple[int, ...] = (5, 10)

# multiple choice partial credit: subtract wrong picks from the numerator
MC_PENALIZE_INCORRECT: bool = False
# trigger words: require word boundaries instead of plain substrings
TRIGGER_WHOLE_WORDS: bool = False

SCORECARD_TREND_WINDOW: int = 5
SCORECARD_TREND_MARGIN: float = 5.0
TOP_PERFORMER_MIN: float = 90.0
NEEDS_IMPROVEMENT_BELOW: float = 70.0
TEAM_LIST_CAP: int = 5

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "item_id",
    "type",
    "weight",
    "raw",
    "score",
    "max_score",
    "correct",
    "matched",
)
# // env overrides for staging/ops; defaults keep the lenient legacy behaviour.
MC_PENALIZE_INCORRECT = _env_bool("MC_PENALIZE_INCORRECT", MC_PENALIZE_INCORRECT)
TRIGGER_WHOLE_WORDS = _env_bool("TRIGGER_WHOLE_WORDS", TRIGGER_WHOLE_WORDS)
SCORECARD_TREND_WINDOW = _env_int("SCORECARD_TREND_WINDOW", SCORECARD_TREND_WINDOW)
SCORECARD_TREND_MARGIN = _env_float("SCORECARD_TREND_MARGIN", SCORECARD_TREND_MARGIN)
TOP_PERFORMER_MIN = _env_float("TOP_PERFORMER_MIN", TOP_PERFORMER_MIN)
NEEDS_IMPROVEMENT_BELOW = _env_float("NEEDS_IMPROVEMENT_BELOW", NEEDS_IMPROVEMENT_BELOW)
TEAM_LIST_CAP = _env_int("TEAM_LIST_CAP", TEAM_LIST_CAP)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)
