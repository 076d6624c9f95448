from __future__ import annotations

import pytest

from grading_core.types import GradableItem, Option


def mc_item(
    item_id: str = "mc1",
    *,
    options: tuple[str, ...] = ("A", "B", "C"),
    correct: tuple[str, ...] = ("A",),
    weight: float | None = None,
    partial: bool = False,
    penalize: bool | None = None,
    category_id: str | None = None,
) -> GradableItem:
    return GradableItem(
        id=item_id,
        scoring_type="multipleChoice",
        weight=weight,
        category_id=category_id,
        options=tuple(Option(id=o, text=f"Option {o}", is_correct=o in correct) for o in options),
        allow_partial_credit=partial,
        penalize_incorrect=penalize,
    )


def open_item(
    item_id: str = "open1",
    *,
    exact: str | None = None,
    triggers: tuple[str, ...] = (),
    weight: float | None = None,
    whole_words: bool | None = None,
) -> GradableItem:
    return GradableItem(
        id=item_id,
        scoring_type="openText",
        weight=weight,
        exact_answer=exact,
        trigger_words=triggers,
        whole_words=whole_words,
    )


def build_quality_check(*, category_weight: float = 2.0) -> list[GradableItem]:
    """A small Quality System check: one task of each numeric discipline."""

    return [
        GradableItem(id="greeting", scoring_type="checkbox", category_id="opening",
                     category_default_weight=category_weight),
        GradableItem(id="empathy", scoring_type="scale", scale_size=5, category_id="tone"),
        GradableItem(id="solution", scoring_type="points", max_points=10, weight=3.0, category_id="resolution"),
        GradableItem(id="hold_time", scoring_type="scale", scale_size=10, inverted=True, category_id="tone"),
    ]


@pytest.fixture
def quality_check() -> list[GradableItem]:
    return build_quality_check()
