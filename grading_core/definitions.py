"""Build GradableItem definitions from the host's JSON payloads."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from . import config
from .errors import ConfigurationError
from .types import SCORING_TYPES, GradableItem, Option

_TYPE_ALIASES: Dict[str, str] = {
    "multiplechoice": "multipleChoice",
    "multiple_choice": "multipleChoice",
    "mc": "multipleChoice",
    "opentext": "openText",
    "open_text": "openText",
    "open": "openText",
    "points": "points",
    "scale": "scale",
    "checkbox": "checkbox",
}


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return default


def _scoring_type(raw: Any, item_id: Optional[str]) -> str:
    if isinstance(raw, str):
        key = raw.strip()
        if key in SCORING_TYPES:
            return key
        alias = _TYPE_ALIASES.get(key.lower())
        if alias:
            return alias
    raise ConfigurationError(f"unknown scoring type {raw!r}", item_id)


def _option(raw: Any, item_id: str) -> Option:
    if isinstance(raw, Option):
        return raw
    if not isinstance(raw, dict):
        raise ConfigurationError(f"option must be an object, got {type(raw).__name__}", item_id)
    oid = raw.get("id")
    if oid is None or str(oid).strip() == "":
        raise ConfigurationError("option is missing an id", item_id)
    return Option(
        id=str(oid),
        text=str(raw.get("text") or ""),
        is_correct=bool(_flag(_first(raw, "isCorrect", "is_correct", default=False), "isCorrect", item_id)),
    )


def _flag(value: Any, key: str, item_id: Optional[str]) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigurationError(f"{key} must be true or false, got {value!r}", item_id)


def item_from_dict(data: Dict[str, Any]) -> GradableItem:
    if isinstance(data, GradableItem):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"item definition must be an object, got {type(data).__name__}")
    iid = data.get("id")
    if iid is None or str(iid).strip() == "":
        raise ConfigurationError("item definition is missing an id")
    iid = str(iid)
    stype = _scoring_type(_first(data, "scoringType", "scoring_type", "type", "questionType"), iid)

    triggers = _first(data, "triggerWords", "trigger_words", default=[])
    if isinstance(triggers, str) or not isinstance(triggers, (list, tuple)):
        raise ConfigurationError("triggerWords must be a list of strings", iid)
    if not all(isinstance(t, str) for t in triggers):
        raise ConfigurationError("triggerWords must be a list of strings", iid)
    category_id = _first(data, "categoryId", "category_id")
    options = _first(data, "options", default=[])
    if not isinstance(options, (list, tuple)):
        raise ConfigurationError("options must be a list", iid)

    return GradableItem(
        id=iid,
        scoring_type=stype,  # type: ignore[arg-type]
        weight=_first(data, "weight", "weightOverride", "weight_override", "weighting"),
        category_default_weight=_first(
            data, "categoryDefaultWeight", "category_default_weight", "categoryWeight", "categoryWeighting"
        ),
        category_id=None if category_id is None else str(category_id),
        text=str(_first(data, "text", "title", "questionText", default="")),
        options=tuple(_option(o, iid) for o in options),
        allow_partial_credit=bool(_flag(
            _first(data, "allowPartialCredit", "allow_partial_credit", "allowPartialAnswer", default=False),
            "allowPartialCredit", iid,
        )),
        penalize_incorrect=_flag(_first(data, "penalizeIncorrect", "penalize_incorrect"), "penalizeIncorrect", iid),
        exact_answer=_first(data, "exactAnswer", "exact_answer"),
        trigger_words=tuple(triggers),
        whole_words=_flag(_first(data, "wholeWords", "whole_words"), "wholeWords", iid),
        max_points=_first(data, "maxPoints", "max_points", default=config.DEFAULT_MAX_POINTS),
        scale_size=_first(data, "scaleSize", "scale_size", default=config.DEFAULT_SCALE_SIZE),
        inverted=bool(_flag(
            _first(data, "inverted", "scaleInverted", "scale_inverted", default=False), "inverted", iid
        )),
    )


def items_from_payload(raw: Iterable[Any]) -> List[GradableItem]:
    if isinstance(raw, dict):
        raw = raw.get("items", [])
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError("item definitions must be a list")
    return [item_from_dict(r) for r in raw]


def load_items(path: str | Path) -> List[GradableItem]:
    text = Path(path).read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path}: malformed JSON ({exc})") from exc
    return items_from_payload(raw)


__all__ = ["item_from_dict", "items_from_payload", "load_items"]
