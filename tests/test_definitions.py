from __future__ import annotations

import json

import pytest

from grading_core.definitions import item_from_dict, items_from_payload, load_items
from grading_core.errors import ConfigurationError
from grading_core.validators import validate_item


def test_knowledge_check_question_payload():
    item = item_from_dict(
        {
            "id": "q7",
            "questionType": "multiple_choice",
            "weighting": 1.5,
            "categoryWeighting": 2,
            "allowPartialAnswer": True,
            "options": [
                {"id": "o1", "text": "Refund", "isCorrect": True},
                {"id": "o2", "text": "Ignore", "isCorrect": False},
            ],
        }
    )
    assert item.scoring_type == "multipleChoice"
    assert item.weight == 1.5
    assert item.category_default_weight == 2
    assert item.allow_partial_credit is True
    assert item.correct_option_ids() == frozenset({"o1"})


def test_quality_task_payload_defaults():
    item = item_from_dict({"id": "t1", "scoringType": "scale", "scaleInverted": True, "weightOverride": 2})
    assert (item.scale_size, item.inverted, item.weight) == (5, True, 2)
    points = item_from_dict({"id": "t2", "scoring_type": "points"})
    assert points.max_points == 10


def test_open_question_aliases():
    item = item_from_dict({"id": "q", "type": "open", "exactAnswer": "yes", "triggerWords": ["ok", "sure"]})
    assert item.scoring_type == "openText"
    assert item.trigger_words == ("ok", "sure")


@pytest.mark.parametrize(
    "payload",
    [
        "not an object",
        {"scoringType": "checkbox"},
        {"id": "x", "scoringType": "essay"},
        {"id": "x", "scoringType": "openText", "triggerWords": "refund"},
        {"id": "x", "scoringType": "multipleChoice", "options": [{"text": "no id"}]},
    ],
)
def test_malformed_payloads(payload):
    with pytest.raises(ConfigurationError):
        item_from_dict(payload)


def test_items_from_payload_accepts_wrapped_list():
    items = items_from_payload({"items": [{"id": "a", "type": "checkbox"}]})
    assert [i.id for i in items] == ["a"]


def test_load_items(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"id": "a", "type": "checkbox"}, {"id": "b", "type": "points", "maxPoints": 4}]))
    items = load_items(path)
    assert [i.scoring_type for i in items] == ["checkbox", "points"]

    broken = tmp_path / "broken.json"
    broken.write_text("{nope")
    with pytest.raises(ConfigurationError):
        load_items(broken)


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "s", "type": "scale", "scaleSize": 7},
        {"id": "p", "type": "points", "maxPoints": 0},
        {"id": "o", "type": "open"},
        {"id": "m", "type": "multipleChoice", "options": []},
        {"id": "m", "type": "multipleChoice", "options": [{"id": "A"}, {"id": "A"}]},
        {"id": "m", "type": "multipleChoice", "allowPartialCredit": True, "options": [{"id": "A"}]},
        {"id": "w", "type": "checkbox", "categoryDefaultWeight": -1},
        {"id": "e", "type": "open", "exactAnswer": 42},
    ],
)
def test_validate_item_rejects_ungradable_definitions(payload):
    item = item_from_dict(payload)
    with pytest.raises(ConfigurationError) as info:
        validate_item(item)
    assert info.value.item_id == payload["id"]


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "x", "scoringType": "openText", "exactAnswer": "yes", "triggerWords": [None]},
        {"id": "x", "scoringType": "openText", "triggerWords": ["refund", 3]},
        {"id": "x", "scoringType": "scale", "inverted": "false"},
        {"id": "x", "scoringType": "multipleChoice", "allowPartialCredit": "no", "options": [{"id": "A"}]},
        {"id": "x", "scoringType": "openText", "triggerWords": ["ok"], "wholeWords": 2},
    ],
)
def test_non_string_triggers_and_loose_flags_are_rejected(payload):
    with pytest.raises(ConfigurationError) as info:
        item_from_dict(payload)
    assert info.value.item_id == "x"


def test_numeric_flags_and_category_ids():
    item = item_from_dict({"id": "s", "type": "scale", "inverted": 0, "categoryId": 7})
    assert item.inverted is False
    assert item.category_id == "7"


def test_non_string_exact_answer_is_a_configuration_error():
    item = item_from_dict({"id": "q", "scoringType": "openText", "exactAnswer": 42})
    with pytest.raises(ConfigurationError) as info:
        validate_item(item)
    assert info.value.item_id == "q"
