from __future__ import annotations
from typing import Optional


class ScoringError(Exception):
    """Base error for the scoring engine. Carries the offending item id, if any."""

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.item_id = item_id

    def __str__(self) -> str:
        if self.item_id is None:
            return self.message
        return f"[{self.item_id}] {self.message}"

    def to_dict(self) -> dict:
        return {"error": self.kind, "item_id": self.item_id, "message": self.message}

    kind = "scoring"


class ConfigurationError(ScoringError):
    """A gradable item, weight or passing score is defined badly."""

    kind = "configuration"


class ValidationError(ScoringError):
    """A raw response has the wrong shape for its item's scoring type."""

    kind = "validation"


__all__ = ["ScoringError", "ConfigurationError", "ValidationError"]
