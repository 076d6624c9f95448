"""Literal trigger-word matching for free-text answers."""
from __future__ import annotations
import re
from typing import Iterable, List, Optional

from . import config

_WS_RX = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Trim, collapse internal whitespace and case-fold."""
    if not isinstance(text, str):
        return ""
    return _WS_RX.sub(" ", text).strip().casefold()


def _contains(haystack: str, needle: str, whole_words: bool) -> bool:
    if not whole_words:
        return needle in haystack
    return re.search(r"(?<!\w)" + re.escape(needle) + r"(?!\w)", haystack) is not None


def match(text: Optional[str], triggers: Iterable[str], whole_words: Optional[bool] = None) -> List[str]:
    """
    Return the triggers found in ``text``, in input order and original spelling.

    Matching is a case-insensitive contiguous substring search on the
    normalized text, so "refund" also hits "non-refundable". Pass
    ``whole_words=True`` (or set TRIGGER_WHOLE_WORDS) to require word
    boundaries. Blank triggers never match.
    """
    if whole_words is None:
        whole_words = config.TRIGGER_WHOLE_WORDS
    hay = normalize_text(text)
    out: List[str] = []
    if not hay:
        return out
    for trig in triggers or ():
        needle = normalize_text(trig)
        if needle and _contains(hay, needle, whole_words):
            out.append(trig)
    return out


__all__ = ["normalize_text", "match"]
