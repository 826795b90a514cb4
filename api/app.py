from __future__ import annotations
from fastapi import FastAPI, HTTPException, Body
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import os, logging, typing as t

# ---- Engine imports ----
from archetype_core.engine import score_quiz
from archetype_core.config import load_config
from archetype_core.catalogue import default_catalogue
from archetype_core.errors import NoValidScoresError, DivideByZeroError
from archetype_core.types import parse_quiz, parse_responses
from archetype_core.validators import validate_quiz, validate_responses
from archetype_core.audit_quiz import audit_quiz

log = logging.getLogger(__name__)

app = FastAPI(title="Archetype Scoring API")


@app.get("/")
def root():
    return {"status": "ok", "service": "archetype-scoring-api"}


ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

INSUFFICIENT_DATA = "insufficient data to compute a result"


# ---- Schemas ----
# question/response payloads stay loose so the structural validators, not
# pydantic, produce the itemised violation list
class ScoreOptions(BaseModel):
    tieTolerance: float | None = Field(default=None, ge=0.0, lt=1.0)
    breakTiesWithTraits: bool | None = None
    includeVisualizations: bool | None = None


class ScoreReq(BaseModel):
    questions: t.Any = None
    responses: t.Any = None
    options: ScoreOptions | None = None


class ValidateReq(BaseModel):
    questions: t.Any = None
    responses: t.Any = None


class AuditReq(BaseModel):
    questions: t.Any = None


# ---- Health ----
@app.get("/health")
def health():
    cfg = load_config()
    return {
        "catalogue_size": len(default_catalogue()),
        "config": cfg.to_dict(),
    }


@app.get("/archetypes")
def archetypes():
    return {"archetypes": default_catalogue().to_list()}


# ---- Validation / scoring ----
@app.post("/quiz/validate")
def validate(req: ValidateReq = Body(...)):
    quiz_report = validate_quiz(req.questions)
    errors = list(quiz_report.errors)
    if req.responses is not None:
        errors.extend(validate_responses(req.questions, req.responses).errors)
    return {"valid": not errors, "errors": errors}


@app.post("/quiz/score")
def score(req: ScoreReq = Body(...)):
    errors = validate_quiz(req.questions).errors + validate_responses(req.questions, req.responses).errors
    if errors:
        raise HTTPException(422, {"errors": errors})

    opts = req.options or ScoreOptions()
    cfg = load_config()
    try:
        res = score_quiz(
            parse_quiz(req.questions),
            parse_responses(req.responses),
            cfg,
            tie_tolerance=opts.tieTolerance,
            break_ties_with_traits=opts.breakTiesWithTraits,
            include_visualizations=opts.includeVisualizations,
        )
    except (NoValidScoresError, DivideByZeroError) as exc:
        log.info("scoring rejected: %s", exc)
        raise HTTPException(422, {"message": INSUFFICIENT_DATA, "reason": str(exc)})
    return res.to_dict()


@app.post("/quiz/audit")
def audit(req: AuditReq = Body(...)):
    report = validate_quiz(req.questions)
    if not report.valid:
        raise HTTPException(422, {"errors": report.errors})
    return audit_quiz(parse_quiz(req.questions))
