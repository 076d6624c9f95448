from __future__ import annotations
import math
from typing import Any, Optional

from . import config
from .errors import ConfigurationError
from .types import GradableItem


def check_weight(value: Any, item_id: Optional[str] = None, label: str = "weight") -> Optional[float]:
    """Return ``value`` as a float, ``None`` if unset; raise on non-positive weights."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{label} must be a number, got {value!r}", item_id)
    w = float(value)
    if not math.isfinite(w) or w <= 0.0:
        raise ConfigurationError(f"{label} must be positive, got {value!r}", item_id)
    return w


def resolve(item: GradableItem, category_default_weight: Optional[float] = None) -> float:
    """Effective weight: item override, then category default, then the global fallback."""
    own = check_weight(item.weight, item.id)
    category = check_weight(
        category_default_weight if category_default_weight is not None else item.category_default_weight,
        item.id,
        label="category default weight",
    )
    if own is not None:
        return own
    if category is not None:
        return category
    return float(config.DEFAULT_WEIGHT)


__all__ = ["check_weight", "resolve"]
