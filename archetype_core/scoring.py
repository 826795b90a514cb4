from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, Mapping, Optional, Sequence

from .catalogue import TraitCatalogue, default_catalogue
from .errors import DivideByZeroError, ScoreOverflowError
from .types import Question, Response

log = logging.getLogger(__name__)


def _weight(q: Question) -> float:
    return 1.0 if q.weight is None else float(q.weight)


def aggregate_scores(
    questions: Sequence[Question],
    responses: Iterable[Response],
    catalogue: Optional[TraitCatalogue] = None,
) -> Dict[str, float]:
    """
    S(A) = Σ wᵢ × pᵢ(A) over every response that resolves.
    Every catalogued archetype starts at 0.0; ids only seen in answers are
    added as they appear.  Unresolvable responses are logged and skipped.
    """
    cat = catalogue if catalogue is not None else default_catalogue()
    scores: Dict[str, float] = {aid: 0.0 for aid in cat.ids()}
    by_id = {q.id: q for q in questions}

    processed = 0
    for resp in responses:
        q = by_id.get(resp.question_id)
        if q is None:
            log.warning("question %s not found; response skipped", resp.question_id)
            continue
        ans = q.answer(resp.answer_id)
        if ans is None:
            log.warning("answer %s not found for question %s; response skipped", resp.answer_id, resp.question_id)
            continue
        w = _weight(q)
        for aid, pts in (ans.archetype_scores or {}).items():
            scores[aid] = scores.get(aid, 0.0) + w * float(pts)
        processed += 1

    # the magnitude sum also bounds every later total (centroid, distribution)
    if not math.isfinite(sum(abs(s) for s in scores.values())):
        raise ScoreOverflowError("weighted points overflowed; scores are not finite")
    log.debug("aggregated %d responses into %d archetype scores", processed, len(scores))
    return scores


def total_weight(questions: Sequence[Question]) -> float:
    return sum(_weight(q) for q in questions)


def normalize_scores(scores: Mapping[str, float], questions: Sequence[Question]) -> Dict[str, float]:
    """Scale every score by ``1 / Σ weights``; returns a new mapping."""
    tw = total_weight(questions)
    if tw == 0:
        raise DivideByZeroError("total question weight is zero")
    out = {aid: s / tw for aid, s in scores.items()}
    if not all(math.isfinite(v) for v in out.values()):
        raise ScoreOverflowError("normalized scores overflowed; question weights are too small")
    return out
