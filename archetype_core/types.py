from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union

QuestionId = Union[str, int]
AnswerId = Union[str, int]
ConfidenceLevel = Literal["NONE", "PERFECT", "STRONG", "MODERATE", "WEAK"]

TRAIT_DIMENSIONS: Tuple[str, ...] = ("awareness", "affect", "agency", "time", "relationality", "posture")
# dimensions whose natural range is [-1, 1]; the rest live in [0, 1]
SIGNED_DIMENSIONS: Tuple[str, ...] = ("affect", "time")


@dataclass
class Answer:
    id: AnswerId; text: str = ""
    archetype_scores: Dict[str, float] = field(default_factory=dict)


@dataclass
class Question:
    id: QuestionId; text: str
    answers: List[Answer] = field(default_factory=list)
    weight: float = 1.0

    def answer(self, answer_id: AnswerId) -> Optional[Answer]:
        return next((a for a in self.answers if a.id == answer_id), None)


@dataclass(frozen=True)
class Response:
    question_id: QuestionId; answer_id: AnswerId


@dataclass(frozen=True)
class TraitProfile:
    awareness: float
    affect: float
    agency: float
    time: float
    relationality: float
    posture: float

    def as_vector(self) -> Tuple[float, ...]:
        return tuple(float(getattr(self, d)) for d in TRAIT_DIMENSIONS)

    def to_dict(self) -> Dict[str, float]:
        return {d: float(getattr(self, d)) for d in TRAIT_DIMENSIONS}

    @classmethod
    def from_vector(cls, vec: Sequence[float]) -> "TraitProfile":
        return cls(*(float(v) for v in vec))


@dataclass(frozen=True)
class CataloguedArchetype:
    id: str
    profile: TraitProfile
    kind: Literal["catalogued"] = "catalogued"


@dataclass(frozen=True)
class AdHocArchetype:
    """An id that only appears in answer scoring; score-only, no trait math."""
    id: str
    kind: Literal["ad_hoc"] = "ad_hoc"


ArchetypeEntry = Union[CataloguedArchetype, AdHocArchetype]


@dataclass(frozen=True)
class DominanceResult:
    dominant: Tuple[str, ...]
    scores: Mapping[str, float]
    max_score: float
    min_score: float
    threshold: float
    variance: float

    @property
    def has_tie(self) -> bool:
        return len(self.dominant) > 1


@dataclass(frozen=True)
class Confidence:
    score: float
    level: ConfidenceLevel
    first_place: Optional[str] = None
    second_place: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "level": self.level,
                "firstPlace": self.first_place, "secondPlace": self.second_place}


@dataclass(frozen=True)
class RadarPoint:
    dimension: str
    angle: float
    angle_degrees: float
    radius: float
    raw_value: float
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"dimension": self.dimension, "angle": self.angle, "angleDegrees": self.angle_degrees,
                "radius": self.radius, "rawValue": self.raw_value, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class DistributionEntry:
    archetype_id: str
    score: float
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {"archetypeId": self.archetype_id, "score": self.score, "percentage": self.percentage}


@dataclass(frozen=True)
class Visualizations:
    radar: List[RadarPoint]
    radar_area: float
    distribution: List[DistributionEntry]
    primary_radar: Optional[List[RadarPoint]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radarChart": {"coordinates": [p.to_dict() for p in self.radar], "area": self.radar_area},
            "scoreDistribution": [e.to_dict() for e in self.distribution],
            "primaryArchetypeRadar": (
                {"coordinates": [p.to_dict() for p in self.primary_radar]}
                if self.primary_radar is not None else None
            ),
        }


@dataclass(frozen=True)
class Result:
    primary: str
    primary_score: float
    dominance: DominanceResult
    # read-only views; the pipeline keeps no handle on the underlying dicts
    all_scores: Mapping[str, float]
    normalized_scores: Mapping[str, float]
    confidence: Confidence
    trait_profile: TraitProfile
    visualizations: Optional[Visualizations]
    questions_answered: int
    total_questions: int

    @property
    def is_complete(self) -> bool:
        return self.questions_answered == self.total_questions

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase payload consumed by the UI layer."""
        d = self.dominance
        return {
            "primary": self.primary,
            "primaryScore": self.primary_score,
            "dominantArchetypes": list(d.dominant),
            "dominantScores": dict(d.scores),
            "hasTie": d.has_tie,
            "tieThreshold": d.threshold,
            "allScores": dict(self.all_scores),
            "normalizedScores": dict(self.normalized_scores),
            "maxScore": d.max_score,
            "variance": d.variance,
            "confidence": self.confidence.to_dict(),
            "userTraitProfile": self.trait_profile.to_dict(),
            "userTraitVector": list(self.trait_profile.as_vector()),
            "visualizations": self.visualizations.to_dict() if self.visualizations else None,
            "questionsAnswered": self.questions_answered,
            "totalQuestions": self.total_questions,
            "isComplete": self.is_complete,
        }


# ---- parsing of collaborator payloads ----
def _answer_from_dict(raw: Mapping[str, Any]) -> Answer:
    pts = raw.get("archetypeScores", raw.get("archetype_scores")) or {}
    return Answer(id=raw["id"], text=str(raw.get("text") or ""),
                  archetype_scores={str(k): float(v) for k, v in pts.items()})


def parse_quiz(raw: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> List[Question]:
    """Turn a plain quiz definition into :class:`Question` objects.

    Accepts either the question list itself or an object with a
    ``questions`` key.  Run :func:`validators.validate_quiz` first; this
    helper assumes a structurally valid payload.
    """
    items = raw.get("questions", []) if isinstance(raw, Mapping) else raw
    out: List[Question] = []
    for q in items:
        weight = q.get("weight")
        out.append(Question(
            id=q["id"],
            text=str(q.get("text") or ""),
            answers=[_answer_from_dict(a) for a in q.get("answers") or []],
            weight=1.0 if weight is None else float(weight),
        ))
    return out


def parse_responses(raw: Sequence[Mapping[str, Any]]) -> List[Response]:
    return [
        Response(question_id=r.get("questionId", r.get("question_id")),
                 answer_id=r.get("answerId", r.get("answer_id")))
        for r in raw
    ]
