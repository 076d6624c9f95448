from __future__ import annotations
from typing import Any, Callable, Dict, List
import logging
import math

from . import config
from .errors import ConfigurationError, ValidationError
from .triggers import match, normalize_text
from .types import GradableItem, ItemResult

log = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}


def _clamp(x: float, lo: float, hi: float) -> float:
    if x < lo: return lo
    if x > hi: return hi
    return x


def _as_number(item: GradableItem, value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"expected a number, got boolean {value!r}", item.id)
    if isinstance(value, (int, float)):
        v = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            v = float(value.strip())
        except ValueError:
            raise ValidationError(f"expected a number, got {value!r}", item.id) from None
    else:
        raise ValidationError(f"expected a number, got {type(value).__name__}", item.id)
    if not math.isfinite(v):
        raise ValidationError(f"expected a finite number, got {value!r}", item.id)
    return v


def _clamp_warn(item: GradableItem, v: float, lo: float, hi: float, warnings: List[str]) -> float:
    c = _clamp(v, lo, hi)
    if c != v:
        msg = f"value {v:g} outside {lo:g}..{hi:g}, clamped to {c:g}"
        warnings.append(msg)
        log.warning("item %s: %s", item.id, msg)
    return c


def score_multiple_choice(item: GradableItem, value: Any, weight: float) -> ItemResult:
    """
    Exact set match earns the full weight. With partial credit, the weight is
    scaled by correct picks / correct options; wrong picks only cost the exact
    match unless the item (or MC_PENALIZE_INCORRECT) opts into subtracting them.
    """
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ValidationError(f"expected a list of option ids, got {type(value).__name__}", item.id)
    known = {o.id for o in item.options}
    selected = set()
    for v in value:
        oid = str(v)
        if oid not in known:
            raise ValidationError(f"unknown option id {oid!r}", item.id)
        selected.add(oid)

    correct = item.correct_option_ids()
    total_correct = len(correct)
    correct_selected = len(selected & correct)
    incorrect_selected = len(selected - correct)
    penalize = config.MC_PENALIZE_INCORRECT if item.penalize_incorrect is None else item.penalize_incorrect

    if total_correct == 0 and item.allow_partial_credit:
        raise ConfigurationError("partial credit needs at least one correct option", item.id)

    is_correct = total_correct > 0 and selected == correct
    mode = "exact"
    if is_correct:
        score = weight
    elif item.allow_partial_credit:
        numerator = correct_selected - incorrect_selected if penalize else correct_selected
        score = weight * max(0, numerator) / total_correct
        mode = "partial_penalized" if penalize else "partial"
    else:
        score = 0.0

    meta = {
        "mode": mode,
        "selected": sorted(selected),
        "correct_selected": correct_selected,
        "incorrect_selected": incorrect_selected,
        "total_correct": total_correct,
    }
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=_clamp(score, 0.0, weight),
        max_score=weight,
        is_correct=is_correct,
        weight=weight,
        category_id=item.category_id,
        meta=meta,
    )


def score_open_text(item: GradableItem, value: Any, weight: float) -> ItemResult:
    # exact answer OR any trigger word; open text has no partial credit
    if not isinstance(value, str):
        raise ValidationError(f"expected text, got {type(value).__name__}", item.id)
    answer = normalize_text(value)
    exact = normalize_text(item.exact_answer)
    exact_match = bool(exact) and answer == exact
    matched = match(value, item.trigger_words, whole_words=item.whole_words) if item.trigger_words else []
    is_correct = exact_match or bool(matched)
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=weight if is_correct else 0.0,
        max_score=weight,
        is_correct=is_correct,
        weight=weight,
        category_id=item.category_id,
        matched_triggers=tuple(matched),
        meta={"exact_match": exact_match, "empty": not answer},
    )


def score_points(item: GradableItem, value: Any, weight: float) -> ItemResult:
    max_points = float(item.max_points)
    warnings: List[str] = []
    raw = _as_number(item, value)
    v = _clamp_warn(item, raw, 0.0, max_points, warnings)
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=v / max_points * weight,
        max_score=weight,
        is_correct=v == max_points,
        weight=weight,
        category_id=item.category_id,
        warnings=tuple(warnings),
        meta={"raw": raw, "points": v, "max_points": max_points},
    )


def score_scale(item: GradableItem, value: Any, weight: float) -> ItemResult:
    size = int(item.scale_size)
    raw = _as_number(item, value)
    if raw != int(raw):
        raise ValidationError(f"expected a whole scale step, got {value!r}", item.id)
    warnings: List[str] = []
    v = _clamp_warn(item, raw, 1.0, float(size), warnings)
    if item.inverted:
        normalized = (size - v) / (size - 1)
    else:
        normalized = (v - 1) / (size - 1)
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=normalized * weight,
        max_score=weight,
        is_correct=normalized == 1.0,
        weight=weight,
        category_id=item.category_id,
        warnings=tuple(warnings),
        meta={"raw": raw, "step": int(v), "scale_size": size, "inverted": item.inverted},
    )


def _as_bool(item: GradableItem, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _TRUE_STRINGS: return True
        if key in _FALSE_STRINGS: return False
    raise ValidationError(f"expected a boolean, got {value!r}", item.id)


def score_checkbox(item: GradableItem, value: Any, weight: float) -> ItemResult:
    checked = _as_bool(item, value)
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=weight if checked else 0.0,
        max_score=weight,
        is_correct=checked is True,
        weight=weight,
        category_id=item.category_id,
        meta={"checked": checked},
    )


Evaluator = Callable[[GradableItem, Any, float], ItemResult]

EVALUATORS: Dict[str, Evaluator] = {
    "multipleChoice": score_multiple_choice,
    "openText": score_open_text,
    "points": score_points,
    "scale": score_scale,
    "checkbox": score_checkbox,
}


def score_item(item: GradableItem, value: Any, weight: float) -> ItemResult:
    """
    Grade one present response with an already resolved weight.
    multipleChoice: iterable of option ids. openText: str.
    points/scale: number. checkbox: bool.
    """
    fn = EVALUATORS.get(item.scoring_type)
    if fn is None:
        raise ConfigurationError(f"unknown scoring type {item.scoring_type!r}", item.id)
    return fn(item, value, weight)


def ungraded(item: GradableItem, weight: float) -> ItemResult:
    return ItemResult(
        item_id=item.id,
        scoring_type=item.scoring_type,
        score=0.0,
        max_score=weight,
        is_correct=False,
        graded=False,
        weight=weight,
        category_id=item.category_id,
    )


__all__ = [
    "EVALUATORS",
    "score_checkbox",
    "score_item",
    "score_multiple_choice",
    "score_open_text",
    "score_points",
    "score_scale",
    "ungraded",
]
