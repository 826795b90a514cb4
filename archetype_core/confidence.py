# archetype_core/confidence.py
from __future__ import annotations
from typing import Mapping

from .config import CONFIDENCE_MODERATE, CONFIDENCE_STRONG, SCORE_EPSILON
from .dominance import rank_entries
from .types import Confidence, ConfidenceLevel


def level_for(score: float, strong: float = CONFIDENCE_STRONG, moderate: float = CONFIDENCE_MODERATE) -> ConfidenceLevel:
    if score >= strong: return "STRONG"
    if score >= moderate: return "MODERATE"
    return "WEAK"


def estimate_confidence(
    scores: Mapping[str, float],
    strong: float = CONFIDENCE_STRONG,
    moderate: float = CONFIDENCE_MODERATE,
    epsilon: float = SCORE_EPSILON,
) -> Confidence:
    """confidence = (S_first - S_second) / S_first over positive scores only.

    Places follow the same ranking as the dominant set.
    """
    positive = rank_entries([(aid, float(s)) for aid, s in scores.items() if s > 0], epsilon)
    if not positive:
        return Confidence(score=0.0, level="NONE")
    if len(positive) == 1:
        return Confidence(score=1.0, level="PERFECT", first_place=positive[0][0])
    (first, s1), (second, s2) = positive[0], positive[1]
    conf = max(0.0, (s1 - s2) / s1)
    return Confidence(score=conf, level=level_for(conf, strong, moderate), first_place=first, second_place=second)
