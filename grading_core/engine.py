# grading_core/engine.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from . import config
from .aggregate import aggregate, category_breakdown
from .definitions import item_from_dict
from .errors import ValidationError
from .scoring import score_item, ungraded
from .types import EvaluationResult, GradableItem, ItemResult
from .validators import validate_items, validate_passing_score
from .verdict import decide
from .weights import check_weight, resolve


log = logging.getLogger(__name__)


def _emit_trace(**values: object) -> None:
    if not config.DEBUG_TRACE:
        return
    ordered = []
    for key in config.TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(ordered))


class EvaluationRunner:
    """
    Grades one evaluation: resolve weights, dispatch each present response to
    its evaluator, aggregate graded items and decide pass/fail.

    The runner keeps no state between calls; ``category_weights`` only feeds
    the category-default slot of weight resolution.
    """

    def __init__(self, category_weights: Optional[Mapping[str, float]] = None):
        cw: Dict[str, float] = {}
        for cid, w in (category_weights or {}).items():
            cw[str(cid)] = check_weight(w, None, label=f"weight of category {cid!r}")  # type: ignore[assignment]
        self.category_weights = cw

    def _weight(self, item: GradableItem) -> float:
        category = self.category_weights.get(str(item.category_id)) if item.category_id is not None else None
        return resolve(item, category)

    def run(
        self,
        items: Iterable[Any],
        responses: Optional[Mapping[str, Any]],
        passing_score: Any,
    ) -> EvaluationResult:
        threshold = validate_passing_score(passing_score)
        defs = validate_items(item_from_dict(it) for it in items)
        if responses is None:
            responses = {}
        if not isinstance(responses, Mapping):
            raise ValidationError(f"responses must be a mapping of item id to answer, got {type(responses).__name__}")

        # weights first so every ConfigurationError fires before any grading
        weights = [self._weight(it) for it in defs]

        known = {it.id for it in defs}
        warnings: List[str] = []
        for rid in responses:
            if rid not in known:
                log.warning("ignoring response for unknown item %s", rid)
                warnings.append(f"{rid}: response for unknown item ignored")

        results: List[ItemResult] = []
        for item, weight in zip(defs, weights):
            value = responses.get(item.id)
            if value is None:
                res = ungraded(item, weight)
            else:
                res = score_item(item, value, weight)
            warnings.extend(f"{item.id}: {w}" for w in res.warnings)
            results.append(res)
            _emit_trace(
                item_id=item.id,
                type=item.scoring_type,
                weight=weight,
                raw=value,
                score=res.score,
                max_score=res.max_score,
                correct=res.is_correct,
                matched=",".join(res.matched_triggers),
            )

        agg = aggregate(results)
        passed = decide(agg.percentage, threshold)
        log.info(
            "evaluation graded=%d/%d score=%.4f/%.4f pct=%d passed=%s",
            agg.graded_count, len(results), agg.total_score, agg.max_score, agg.percentage, passed,
        )
        return EvaluationResult(
            total_score=agg.total_score,
            max_score=agg.max_score,
            percentage=agg.percentage,
            passed=passed,
            passing_score=threshold,
            items=tuple(results),
            categories=tuple(category_breakdown(results)),
            warnings=tuple(warnings),
        )


def run(
    items: Iterable[Any],
    responses: Optional[Mapping[str, Any]],
    passing_score: Any,
    category_weights: Optional[Mapping[str, float]] = None,
) -> EvaluationResult:
    return EvaluationRunner(category_weights).run(items, responses, passing_score)


__all__ = ["EvaluationRunner", "run"]
