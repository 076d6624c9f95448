from __future__ import annotations

import pytest

from grading_core import config
from grading_core.aggregate import aggregate, category_breakdown, max_possible_score, round_half_up
from grading_core.errors import ConfigurationError
from grading_core.types import GradableItem, ItemResult
from grading_core.verdict import decide, performance_band


def _res(item_id: str, score: float, max_score: float, graded: bool = True, category_id: str | None = None):
    return ItemResult(
        item_id=item_id,
        scoring_type="points",
        score=score,
        max_score=max_score,
        is_correct=score == max_score,
        graded=graded,
        weight=max_score,
        category_id=category_id,
    )


def test_sums_and_percentage():
    agg = aggregate([_res("a", 1.0, 2.0), _res("b", 1.0, 1.0)])
    assert agg.total_score == 2.0
    assert agg.max_score == 3.0
    assert agg.percentage == 67
    assert agg.graded_count == 2


def test_ungraded_items_leave_the_denominator():
    agg = aggregate([_res("a", 2.0, 2.0), _res("b", 0.0, 5.0, graded=False)])
    assert agg.max_score == 2.0
    assert agg.percentage == 100


def test_nothing_graded_is_zero_percent_not_an_error():
    agg = aggregate([_res("a", 0.0, 1.0, graded=False)])
    assert (agg.total_score, agg.max_score, agg.percentage) == (0.0, 0.0, 0)
    assert aggregate([]).percentage == 0


def test_half_rounds_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    # 1 of 8 = 12.5%
    assert aggregate([_res("a", 1.0, 8.0)]).percentage == 13


def test_full_precision_is_kept_for_totals():
    agg = aggregate([_res("a", 1.0 / 3.0, 1.0), _res("b", 1.0 / 3.0, 1.0), _res("c", 1.0 / 3.0, 1.0)])
    assert agg.total_score == pytest.approx(1.0)
    assert agg.percentage == 33


def test_category_breakdown_keeps_first_seen_order():
    rows = [
        _res("a", 1.0, 2.0, category_id="tone"),
        _res("b", 3.0, 3.0, category_id="resolution"),
        _res("c", 2.0, 2.0, category_id="tone"),
        _res("d", 0.0, 4.0, graded=False, category_id="resolution"),
        _res("e", 1.0, 1.0),
    ]
    cats = category_breakdown(rows)
    assert [c.category_id for c in cats] == ["tone", "resolution"]
    assert (cats[0].total_score, cats[0].max_score, cats[0].percentage, cats[0].item_count) == (3.0, 4.0, 75, 2)
    assert (cats[1].max_score, cats[1].item_count) == (3.0, 1)


def test_max_possible_score_uses_effective_weights():
    items = [
        GradableItem(id="a", scoring_type="checkbox", weight=2.0),
        GradableItem(id="b", scoring_type="checkbox", category_id="tone"),
        GradableItem(id="c", scoring_type="checkbox"),
    ]
    assert max_possible_score(items) == 4.0
    assert max_possible_score(items, {"tone": 3.0}) == 6.0


def test_threshold_is_a_closed_lower_bound():
    assert decide(70, 70) is True
    assert decide(69, 70) is False
    assert decide(100, 100) is True
    assert decide(0, 0) is True


@pytest.mark.parametrize("bad", [None, -1, 101, "70", True, float("nan")])
def test_passing_score_must_be_supplied_and_sane(bad):
    with pytest.raises(ConfigurationError):
        decide(80, bad)


def test_performance_band(monkeypatch):
    assert performance_band(95) == "top"
    assert performance_band(80) == "solid"
    assert performance_band(69) == "needs_improvement"
    monkeypatch.setattr(config, "TOP_PERFORMER_MIN", 80.0, raising=False)
    assert performance_band(80) == "top"


def test_max_possible_score_matches_numeric_category_ids():
    items = [GradableItem(id="a", scoring_type="checkbox", category_id=7), GradableItem(id="b", scoring_type="checkbox")]
    assert max_possible_score(items, {7: 3.0}) == 4.0
    assert max_possible_score(items, {"7": 2.0}) == 3.0
