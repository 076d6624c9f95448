"""Agent scorecards and team statistics over stored evaluation results."""
from __future__ import annotations

from datetime import datetime, timezone
from statistics import mean
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import config
from .aggregate import round_half_up
from .errors import ValidationError
from .types import AgentSummary, EvaluationRecord, Scorecard, TeamStats, Trend

DateRange = Tuple[datetime, datetime]


def _parse_ts(value: Any) -> datetime:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"bad timestamp {value!r}") from None
    else:
        raise ValidationError(f"bad timestamp {value!r}")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def record_from_dict(data: Mapping[str, Any]) -> EvaluationRecord:
    if isinstance(data, EvaluationRecord):
        return data
    try:
        pct = float(data["percentage"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError("evaluation record needs a numeric percentage", data.get("id")) from None
    cats = data.get("categories") or {}
    try:
        if isinstance(cats, list):
            cats = {str(c["categoryId"]): c.get("percentage", 0) for c in cats}
        categories = {str(k): float(v) for k, v in cats.items()}
    except (KeyError, TypeError, ValueError, AttributeError):
        raise ValidationError("evaluation record has malformed categories", data.get("id")) from None
    return EvaluationRecord(
        agent_id=str(data.get("agentId") or data.get("agent_id") or ""),
        evaluated_at=_parse_ts(data.get("evaluatedAt") or data.get("evaluated_at")),
        percentage=pct,
        passed=bool(data.get("passed", False)),
        categories=categories,
        record_id=data.get("id"),
    )


def _in_range(records: Iterable[EvaluationRecord], date_range: Optional[DateRange]) -> List[EvaluationRecord]:
    rows = list(records)
    if not date_range:
        return rows
    start, end = _parse_ts(date_range[0]), _parse_ts(date_range[1])
    return [r for r in rows if start <= _parse_ts(r.evaluated_at) <= end]


def _trend(newest_first: Sequence[EvaluationRecord]) -> Trend:
    window = config.SCORECARD_TREND_WINDOW
    if window <= 0 or len(newest_first) < 2 * window:
        return "stable"
    recent = mean(r.percentage for r in newest_first[:window])
    previous = mean(r.percentage for r in newest_first[window:2 * window])
    if recent > previous + config.SCORECARD_TREND_MARGIN:
        return "improving"
    if recent < previous - config.SCORECARD_TREND_MARGIN:
        return "declining"
    return "stable"


def build_scorecard(records: Iterable[Any], date_range: Optional[DateRange] = None) -> Scorecard:
    rows = _in_range((record_from_dict(r) for r in records), date_range)
    if not rows:
        return Scorecard(total_reports=0, average_score=0, trend="stable", passing_rate=0)

    newest_first = sorted(rows, key=lambda r: _parse_ts(r.evaluated_at), reverse=True)

    per_cat: Dict[str, List[float]] = {}
    for r in rows:
        for cid, pct in r.categories.items():
            per_cat.setdefault(cid, []).append(pct)
    breakdown = tuple(
        {"categoryId": cid, "averageScore": round_half_up(mean(vals)), "evaluationCount": len(vals)}
        for cid, vals in per_cat.items()
    )

    return Scorecard(
        total_reports=len(rows),
        average_score=round_half_up(mean(r.percentage for r in rows)),
        trend=_trend(newest_first),
        passing_rate=round_half_up(sum(1 for r in rows if r.passed) / len(rows) * 100),
        category_breakdown=breakdown,
        recent=tuple(newest_first[: config.SCORECARD_TREND_WINDOW]),
    )


def team_stats(
    records_by_agent: Mapping[str, Iterable[Any]],
    date_range: Optional[DateRange] = None,
) -> TeamStats:
    agents: List[AgentSummary] = []
    total = 0
    for agent_id, records in records_by_agent.items():
        card = build_scorecard(records, date_range)
        if card.total_reports == 0:
            continue
        total += card.total_reports
        agents.append(
            AgentSummary(
                agent_id=str(agent_id),
                total_reports=card.total_reports,
                average_score=card.average_score,
                trend=card.trend,
            )
        )

    agents.sort(key=lambda a: a.average_score, reverse=True)
    cap = config.TEAM_LIST_CAP
    return TeamStats(
        total_evaluations=total,
        average_score=round_half_up(mean(a.average_score for a in agents)) if agents else 0,
        agent_stats=tuple(agents),
        top_performers=tuple(a for a in agents if a.average_score >= config.TOP_PERFORMER_MIN)[:cap],
        needs_improvement=tuple(a for a in agents if a.average_score < config.NEEDS_IMPROVEMENT_BELOW)[:cap],
    )


__all__ = ["build_scorecard", "record_from_dict", "team_stats"]
