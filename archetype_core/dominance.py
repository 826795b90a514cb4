from __future__ import annotations
import logging
from types import MappingProxyType
from typing import List, Mapping, Tuple

from .config import MINIMUM_VARIANCE, SCORE_EPSILON, TIE_TOLERANCE
from .errors import NoValidScoresError
from .types import DominanceResult

log = logging.getLogger(__name__)


def rank_entries(entries: List[Tuple[str, float]], epsilon: float = SCORE_EPSILON) -> List[Tuple[str, float]]:
    """Order ``(id, value)`` pairs by value descending.

    After an exact ``(-value, id)`` sort, entries are grouped into runs that
    stay within ``epsilon`` of the run's leader; each run is reordered by
    ascending id.  Every later run scores strictly below the leader of the
    one before it, so the first entry is always within ``epsilon`` of the
    maximum.
    """

    exact = sorted(entries, key=lambda kv: (-kv[1], kv[0]))
    out: List[Tuple[str, float]] = []
    run: List[Tuple[str, float]] = []
    for entry in exact:
        if run and run[0][1] - entry[1] >= epsilon:
            out.extend(sorted(run, key=lambda kv: kv[0]))
            run = []
        run.append(entry)
    out.extend(sorted(run, key=lambda kv: kv[0]))
    return out


def tie_threshold(max_score: float, tie_tolerance: float) -> float:
    # τ = S_max × (1 − ε) for the usual non-negative maximum; a negative
    # maximum widens downward so the maximum stays inside the band
    return max_score - abs(max_score) * tie_tolerance


def resolve_dominant(
    scores: Mapping[str, float],
    tie_tolerance: float = TIE_TOLERANCE,
    minimum_variance: float = MINIMUM_VARIANCE,
    epsilon: float = SCORE_EPSILON,
) -> DominanceResult:
    """Find the archetypes within ``tie_tolerance`` of the top score.

    Raises :class:`NoValidScoresError` when the map is empty or every score
    is zero.  Equal positive scores are a legitimate multi-way tie.
    """

    if not scores:
        raise NoValidScoresError("no archetype scores provided")

    vals = [float(v) for v in scores.values()]
    s_max = max(vals)
    s_min = min(vals)
    variance = s_max - s_min
    if variance < minimum_variance and s_max == 0:
        raise NoValidScoresError("no valid scores recorded - all archetypes have zero points")

    threshold = tie_threshold(s_max, tie_tolerance)
    members = [(aid, float(s)) for aid, s in scores.items() if s >= threshold]
    ranked = rank_entries(members, epsilon)

    res = DominanceResult(
        dominant=tuple(aid for aid, _ in ranked),
        scores=MappingProxyType({aid: s for aid, s in ranked}),
        max_score=s_max,
        min_score=s_min,
        threshold=threshold,
        variance=variance,
    )
    log.debug("dominant=%s threshold=%.4f max=%.4f", list(res.dominant), threshold, s_max)
    return res
