from __future__ import annotations
import math
from typing import Dict, Iterable, List, Optional

from .types import AggregateScore, CategoryScore, GradableItem, ItemResult
from .weights import resolve


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; percentages round .5 up
    return int(math.floor(x + 0.5))


def percentage(total: float, maximum: float) -> int:
    if maximum <= 0.0:
        return 0
    pct = round_half_up(total / maximum * 100.0)
    return max(0, min(100, pct))


def aggregate(item_results: Iterable[ItemResult]) -> AggregateScore:
    """Sum graded items only; skipped items drop out of the denominator too."""
    graded = [r for r in item_results if r.graded]
    total = math.fsum(r.score for r in graded)
    maximum = math.fsum(r.max_score for r in graded)
    return AggregateScore(
        total_score=total,
        max_score=maximum,
        percentage=percentage(total, maximum),
        graded_count=len(graded),
    )


def category_breakdown(item_results: Iterable[ItemResult]) -> List[CategoryScore]:
    buckets: Dict[str, List[ItemResult]] = {}
    for r in item_results:
        if not r.graded or r.category_id is None:
            continue
        buckets.setdefault(r.category_id, []).append(r)
    out: List[CategoryScore] = []
    for cid, rows in buckets.items():
        agg = aggregate(rows)
        out.append(
            CategoryScore(
                category_id=cid,
                total_score=agg.total_score,
                max_score=agg.max_score,
                percentage=agg.percentage,
                item_count=agg.graded_count,
            )
        )
    return out


def max_possible_score(
    items: Iterable[GradableItem],
    category_weights: Optional[Dict[str, float]] = None,
) -> float:
    """What a check is worth if every item is answered perfectly."""
    cw = {str(k): v for k, v in (category_weights or {}).items()}
    return math.fsum(
        resolve(it, cw.get(str(it.category_id)) if it.category_id is not None else None) for it in items
    )


__all__ = ["aggregate", "category_breakdown", "max_possible_score", "percentage", "round_half_up"]
