from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import os, typing as t

from grading_core import config
from grading_core.aggregate import max_possible_score
from grading_core.definitions import items_from_payload
from grading_core.engine import EvaluationRunner
from grading_core.errors import ConfigurationError, ScoringError, ValidationError
from grading_core.scorecard import build_scorecard, team_stats
from grading_core.triggers import match
from grading_core.validators import validate_items
from .logging_config import configure_logging

configure_logging()

app = FastAPI(title="Grading API")


@app.get("/")
def root():
    return {"status": "ok", "service": "grading-api"}


ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("GRADING_ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class EvaluateReq(BaseModel):
    items: list[dict[str, t.Any]]
    responses: dict[str, t.Any] = Field(default_factory=dict)
    passing_score: float | None = None
    category_weights: dict[str, float] | None = None

class MatchReq(BaseModel):
    text: str = ""
    triggers: list[str] = Field(default_factory=list)
    whole_words: bool | None = None

class MaxScoreReq(BaseModel):
    items: list[dict[str, t.Any]]
    category_weights: dict[str, float] | None = None

class DateRangeReq(BaseModel):
    start: str
    end: str

class ScorecardReq(BaseModel):
    records: list[dict[str, t.Any]]
    date_range: DateRangeReq | None = None

class TeamStatsReq(BaseModel):
    records_by_agent: dict[str, list[dict[str, t.Any]]]
    date_range: DateRangeReq | None = None

# ---- Helpers ----
def _http_error(exc: ScoringError) -> HTTPException:
    status = 422 if isinstance(exc, ConfigurationError) else 400
    return HTTPException(status, exc.to_dict())


def _range(req: DateRangeReq | None):
    return (req.start, req.end) if req else None

# ---- Health ----
@app.get("/health")
def health():
    return {
        "mc_penalize_incorrect": config.MC_PENALIZE_INCORRECT,
        "trigger_whole_words": config.TRIGGER_WHOLE_WORDS,
        "debug_trace": config.DEBUG_TRACE,
    }

# ---- Grading ----
@app.post("/evaluate")
def evaluate(req: EvaluateReq):
    try:
        runner = EvaluationRunner(req.category_weights)
        result = runner.run(items_from_payload(req.items), req.responses, req.passing_score)
    except ScoringError as exc:
        raise _http_error(exc)
    return result.to_dict()


@app.post("/match")
def match_triggers(req: MatchReq):
    return {"matched": match(req.text, req.triggers, whole_words=req.whole_words)}


@app.post("/max-score")
def max_score(req: MaxScoreReq):
    try:
        items = validate_items(items_from_payload(req.items))
        total = max_possible_score(items, req.category_weights)
    except ScoringError as exc:
        raise _http_error(exc)
    return {"max_score": total}

# ---- Quality tracking ----
@app.post("/scorecard")
def scorecard(req: ScorecardReq):
    try:
        card = build_scorecard(req.records, _range(req.date_range))
    except ValidationError as exc:
        raise _http_error(exc)
    return card.to_dict()


@app.post("/team-stats")
def team(req: TeamStatsReq):
    try:
        stats = team_stats(req.records_by_agent, _range(req.date_range))
    except ValidationError as exc:
        raise _http_error(exc)
    return stats.to_dict()
