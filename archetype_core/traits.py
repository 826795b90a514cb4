"""Trait-space inference and trait-based tie breaking.

The respondent's position in trait space is the score-weighted centroid of
the catalogue profiles of every archetype they scored positively on.  When
several archetypes share the top band, the one whose profile points in the
direction closest to that centroid wins.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from .catalogue import TraitCatalogue, default_catalogue
from .config import SCORE_EPSILON
from .dominance import rank_entries
from .types import TRAIT_DIMENSIONS, AdHocArchetype, TraitProfile
from .vectors import cosine_similarity

log = logging.getLogger(__name__)

__all__ = [
    "infer_trait_vector",
    "infer_trait_profile",
    "rank_by_similarity",
    "break_tie",
]


def infer_trait_vector(
    scores: Mapping[str, float],
    catalogue: Optional[TraitCatalogue] = None,
) -> Tuple[float, ...]:
    """Return ``Σ S(A)·profile(A) / Σ S(A)`` over positive, catalogued scores.

    Archetypes with a non-positive score are ignored.  Ad-hoc archetypes
    (no catalogue profile) are ignored with a warning.  With nothing left to
    average, the zero vector is returned.
    """

    cat = catalogue if catalogue is not None else default_catalogue()
    acc = [0.0] * len(TRAIT_DIMENSIONS)
    total = 0.0
    for aid, score in scores.items():
        if score <= 0:
            continue
        entry = cat.resolve(aid)
        if isinstance(entry, AdHocArchetype):
            log.warning("no trait profile for archetype %s; excluded from trait inference", aid)
            continue
        total += score
        for i, val in enumerate(entry.profile.as_vector()):
            acc[i] += score * val
    if total == 0:
        return tuple(0.0 for _ in TRAIT_DIMENSIONS)
    return tuple(v / total for v in acc)


def infer_trait_profile(
    scores: Mapping[str, float],
    catalogue: Optional[TraitCatalogue] = None,
) -> TraitProfile:
    return TraitProfile.from_vector(infer_trait_vector(scores, catalogue))


def rank_by_similarity(
    candidates: Sequence[str],
    user_vector: Sequence[float],
    catalogue: Optional[TraitCatalogue] = None,
    epsilon: float = SCORE_EPSILON,
) -> List[Tuple[str, float]]:
    """Cosine similarity of each candidate's profile to ``user_vector``.

    Ordered by :func:`~archetype_core.dominance.rank_entries`: similarity
    descending, with runs within ``epsilon`` of their leader in ascending id
    order.  Candidates without a profile score 0.0.
    """

    cat = catalogue if catalogue is not None else default_catalogue()
    sims: List[Tuple[str, float]] = []
    for aid in candidates:
        prof = cat.profile(aid)
        if prof is None:
            log.warning("no trait profile for archetype %s; similarity set to 0", aid)
            sims.append((aid, 0.0))
            continue
        sims.append((aid, cosine_similarity(user_vector, prof.as_vector())))
    return rank_entries(sims, epsilon)


def break_tie(
    tied: Sequence[str],
    scores: Mapping[str, float],
    catalogue: Optional[TraitCatalogue] = None,
    epsilon: float = SCORE_EPSILON,
) -> str:
    """Pick one winner from a multi-member dominant set.

    Neither ``tied`` nor ``scores`` is modified.
    """

    if not tied:
        raise ValueError("break_tie needs at least one candidate")
    user_vector = infer_trait_vector(scores, catalogue)
    ranked = rank_by_similarity(tied, user_vector, catalogue, epsilon)
    log.debug("tie break %s -> %s", [f"{a}={s:.4f}" for a, s in ranked], ranked[0][0])
    return ranked[0][0]
