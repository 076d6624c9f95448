from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from . import config
from .definitions import load_items
from .errors import ConfigurationError
from .types import SCORING_TYPES, GradableItem
from .triggers import normalize_text
from .validators import validate_item


def _item_warnings(item: GradableItem) -> list[str]:
    warnings: list[str] = []
    if item.scoring_type == "multipleChoice" and not item.correct_option_ids():
        warnings.append(f"{item.id} multiple choice has no correct option and always scores 0")

    if item.scoring_type == "openText":
        triggers = [normalize_text(t) for t in item.trigger_words]
        if any(not t for t in triggers):
            warnings.append(f"{item.id} has blank trigger words")
        for i, a in enumerate(triggers):
            for j, b in enumerate(triggers):
                if i != j and a and b and a != b and a in b:
                    warnings.append(f"{item.id} trigger {b!r} is shadowed by {a!r}")
        whole = item.whole_words if item.whole_words is not None else config.TRIGGER_WHOLE_WORDS
        if any(triggers) and not whole:
            warnings.append(f"{item.id} matches trigger words as substrings")
    return warnings


def audit_items(items: Iterable[GradableItem]) -> dict[str, object]:
    totals = {t: 0 for t in SCORING_TYPES}
    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for item in items:
        try:
            validate_item(item)
        except ConfigurationError as exc:
            errors.append(str(exc))
            continue
        if item.id in seen:
            errors.append(f"[{item.id}] duplicate item id")
            continue
        seen.add(item.id)
        totals[item.scoring_type] += 1
        warnings.extend(_item_warnings(item))

    return {"totals": totals, "errors": errors, "warnings": warnings}


def print_report(summary: dict[str, object]) -> None:
    totals: dict[str, int] = summary["totals"]  # type: ignore[assignment]
    print("=== Item Definitions ===")
    for stype in SCORING_TYPES:
        print(f"  {stype:<15}{totals.get(stype, 0):4d}")

    errors: list[str] = summary["errors"]  # type: ignore[assignment]
    if errors:
        print("\nErrors:")
        for msg in errors:
            print(f" - {msg}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    elif not errors:
        print("\nNo warnings.")


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Audit gradable item definitions")
    ap.add_argument("items", help="JSON file with a list of item definitions")
    ap.add_argument("--out", default=None, help="write the JSON summary here")
    args = ap.parse_args(argv)

    try:
        items = load_items(args.items)
    except ConfigurationError as exc:
        print(f"error: {exc}")
        return 1
    summary = audit_items(items)
    print_report(summary)
    if args.out:
        write_summary(summary, Path(args.out))
    if summary["errors"]:
        return 1
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
