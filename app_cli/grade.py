# app_cli/grade.py
from __future__ import annotations
import argparse, json, sys
from pathlib import Path
from typing import Any, List, Optional

from grading_core.definitions import load_items
from grading_core.engine import EvaluationRunner
from grading_core.errors import ScoringError


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _summary_line(res) -> str:
    verdict = "PASSED" if res.passed else "FAILED"
    return (f"{verdict}  {res.percentage}%  ({res.total_score:.2f} / {res.max_score:.2f}, "
            f"threshold {res.passing_score:g}%)")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Grade one evaluation from JSON files")
    ap.add_argument("--items", required=True, help="JSON list of item definitions")
    ap.add_argument("--responses", required=True, help="JSON object: item id -> raw response")
    ap.add_argument("--passing-score", type=float, required=True)
    ap.add_argument("--category-weights", default=None, help="JSON object: category id -> weight")
    ap.add_argument("--out", default=None, help="write the full result JSON here")
    args = ap.parse_args(argv)

    try:
        items = load_items(args.items)
        responses = _read_json(args.responses)
        cw = _read_json(args.category_weights) if args.category_weights else None
        res = EvaluationRunner(cw).run(items, responses, args.passing_score)
    except ScoringError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    payload = json.dumps(res.to_dict(), ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(payload + "\n", encoding="utf-8")
        print(_summary_line(res))
    else:
        print(payload)
    for w in res.warnings:
        print(f"warning: {w}", file=sys.stderr)
    return 0 if res.passed else 2


if __name__ == "__main__": raise SystemExit(main())
