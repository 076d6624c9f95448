from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

ScoringType = Literal["multipleChoice", "openText", "points", "scale", "checkbox"]
SCORING_TYPES: Tuple[str, ...] = ("multipleChoice", "openText", "points", "scale", "checkbox")
Trend = Literal["improving", "declining", "stable"]


@dataclass(frozen=True)
class Option:
    id: str
    text: str = ""
    is_correct: bool = False


@dataclass(frozen=True)
class GradableItem:
    id: str
    scoring_type: ScoringType
    weight: Optional[float] = None
    category_default_weight: Optional[float] = None
    category_id: Optional[str] = None
    text: str = ""
    # multipleChoice
    options: Tuple[Option, ...] = ()
    allow_partial_credit: bool = False
    penalize_incorrect: Optional[bool] = None
    # openText
    exact_answer: Optional[str] = None
    trigger_words: Tuple[str, ...] = ()
    whole_words: Optional[bool] = None
    # points
    max_points: float = 10.0
    # scale
    scale_size: int = 5
    inverted: bool = False

    def correct_option_ids(self) -> frozenset:
        return frozenset(o.id for o in self.options if o.is_correct)


@dataclass(frozen=True)
class ItemResult:
    item_id: str
    scoring_type: str
    score: float
    max_score: float
    is_correct: bool
    graded: bool = True
    weight: float = 1.0
    category_id: Optional[str] = None
    matched_triggers: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "scoringType": self.scoring_type,
            "score": self.score,
            "maxScore": self.max_score,
            "isCorrect": self.is_correct,
            "graded": self.graded,
            "weight": self.weight,
            "categoryId": self.category_id,
            "matchedTriggers": list(self.matched_triggers),
            "warnings": list(self.warnings),
            "meta": dict(self.meta),
        }


@dataclass(frozen=True)
class AggregateScore:
    total_score: float
    max_score: float
    percentage: int
    graded_count: int = 0


@dataclass(frozen=True)
class CategoryScore:
    category_id: str
    total_score: float
    max_score: float
    percentage: int
    item_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categoryId": self.category_id,
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "itemCount": self.item_count,
        }


@dataclass(frozen=True)
class EvaluationResult:
    total_score: float
    max_score: float
    percentage: int
    passed: bool
    passing_score: float
    items: Tuple[ItemResult, ...] = ()
    categories: Tuple[CategoryScore, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def graded_items(self) -> List[ItemResult]:
        return [r for r in self.items if r.graded]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "passed": self.passed,
            "passingScore": self.passing_score,
            "items": [r.to_dict() for r in self.items],
            "categories": [c.to_dict() for c in self.categories],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class EvaluationRecord:
    """A persisted evaluation as the host hands it back for scorecards."""
    agent_id: str
    evaluated_at: datetime
    percentage: float
    passed: bool
    categories: Mapping[str, float] = field(default_factory=dict)
    record_id: Optional[str] = None


@dataclass(frozen=True)
class Scorecard:
    total_reports: int
    average_score: int
    trend: Trend
    passing_rate: int
    category_breakdown: Tuple[Dict[str, Any], ...] = ()
    recent: Tuple[EvaluationRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReports": self.total_reports,
            "averageScore": self.average_score,
            "trend": self.trend,
            "passingRate": self.passing_rate,
            "categoryBreakdown": [dict(c) for c in self.category_breakdown],
            "recentReports": [
                {
                    "id": r.record_id,
                    "evaluatedAt": r.evaluated_at.isoformat(),
                    "percentage": r.percentage,
                    "passed": r.passed,
                }
                for r in self.recent
            ],
        }


@dataclass(frozen=True)
class AgentSummary:
    agent_id: str
    total_reports: int
    average_score: int
    trend: Trend

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.agent_id,
            "totalReports": self.total_reports,
            "averageScore": self.average_score,
            "trend": self.trend,
        }


@dataclass(frozen=True)
class TeamStats:
    total_evaluations: int
    average_score: int
    agent_stats: Tuple[AgentSummary, ...] = ()
    top_performers: Tuple[AgentSummary, ...] = ()
    needs_improvement: Tuple[AgentSummary, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalEvaluations": self.total_evaluations,
            "averageScore": self.average_score,
            "agentStats": [a.to_dict() for a in self.agent_stats],
            "topPerformers": [a.to_dict() for a in self.top_performers],
            "needsImprovement": [a.to_dict() for a in self.needs_improvement],
        }
