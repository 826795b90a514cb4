# archetype_core/engine.py
from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Optional, Sequence

from .catalogue import TraitCatalogue, default_catalogue
from .config import ScoringConfig, TRACE_FIELDS
from .confidence import estimate_confidence
from .dominance import resolve_dominant
from .geometry import polygon_area, radar_coordinates, score_distribution
from .scoring import aggregate_scores, normalize_scores
from .traits import break_tie, infer_trait_vector
from .types import Question, Response, Result, TraitProfile, Visualizations

log = logging.getLogger(__name__)

_DEFAULT_CONFIG: Optional[ScoringConfig] = None


def _default_config() -> ScoringConfig:
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = ScoringConfig()
    return _DEFAULT_CONFIG


def _emit_trace(cfg: ScoringConfig, **values: object) -> None:
    if not cfg.debug_trace:
        return
    ordered = []
    for key in TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(ordered))


def _visualizations(
    profile: TraitProfile,
    scores: dict,
    primary: str,
    catalogue: TraitCatalogue,
) -> Visualizations:
    radar = radar_coordinates(profile)
    primary_profile = catalogue.profile(primary)
    return Visualizations(
        radar=radar,
        radar_area=polygon_area(radar),
        distribution=score_distribution(scores),
        primary_radar=radar_coordinates(primary_profile) if primary_profile is not None else None,
    )


def score_quiz(
    questions: Sequence[Question],
    responses: Sequence[Response],
    config: Optional[ScoringConfig] = None,
    *,
    tie_tolerance: Optional[float] = None,
    break_ties_with_traits: Optional[bool] = None,
    include_visualizations: Optional[bool] = None,
    catalogue: Optional[TraitCatalogue] = None,
) -> Result:
    """Run the full scoring pipeline for one respondent.

    Keyword overrides take precedence over ``config``.  Inputs are not
    validated here; run :mod:`validators` first.  Raises
    :class:`~archetype_core.errors.NoValidScoresError` when nothing scored (or, as
    :class:`~archetype_core.errors.ScoreOverflowError`, when weighted points
    overflow) and :class:`~archetype_core.errors.DivideByZeroError` for a
    zero-weight quiz.
    """

    cfg = (config or _default_config()).with_overrides(
        tie_tolerance=tie_tolerance,
        break_ties_with_traits=break_ties_with_traits,
        include_visualizations=include_visualizations,
    )
    cat = catalogue if catalogue is not None else default_catalogue()

    scores = aggregate_scores(questions, responses, cat)
    dominance = resolve_dominant(
        scores,
        tie_tolerance=cfg.tie_tolerance,
        minimum_variance=cfg.minimum_variance,
        epsilon=cfg.score_epsilon,
    )

    primary = dominance.dominant[0]
    if dominance.has_tie and cfg.break_ties_with_traits:
        primary = break_tie(dominance.dominant, scores, cat, epsilon=cfg.score_epsilon)

    confidence = estimate_confidence(scores, cfg.confidence_strong, cfg.confidence_moderate, cfg.score_epsilon)
    normalized = normalize_scores(scores, questions)
    profile = TraitProfile.from_vector(infer_trait_vector(scores, cat))

    vis = _visualizations(profile, scores, primary, cat) if cfg.include_visualizations else None

    res = Result(
        primary=primary,
        primary_score=scores[primary],
        dominance=dominance,
        all_scores=MappingProxyType(dict(scores)),
        normalized_scores=MappingProxyType(normalized),
        confidence=confidence,
        trait_profile=profile,
        visualizations=vis,
        questions_answered=len(responses),
        total_questions=len(questions),
    )
    _emit_trace(
        cfg,
        primary=primary,
        has_tie=dominance.has_tie,
        threshold=round(dominance.threshold, 4),
        confidence=round(confidence.score, 4),
        level=confidence.level,
        questions_answered=res.questions_answered,
    )
    return res
