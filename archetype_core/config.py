from __future__ import annotations
import os, json, pathlib
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


TIE_TOLERANCE: float = 0.05
MINIMUM_VARIANCE: float = 0.1
CONFIDENCE_STRONG: float = 0.5
CONFIDENCE_MODERATE: float = 0.2
SCORE_EPSILON: float = 1e-4

BREAK_TIES_WITH_TRAITS: bool = True
INCLUDE_VISUALIZATIONS: bool = True

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "primary",
    "has_tie",
    "threshold",
    "confidence",
    "level",
    "questions_answered",
)
# // env overrides for staging/ops; defaults match the published quiz.
TIE_TOLERANCE = _env_float("TIE_TOLERANCE", TIE_TOLERANCE)
MINIMUM_VARIANCE = _env_float("MINIMUM_VARIANCE", MINIMUM_VARIANCE)
BREAK_TIES_WITH_TRAITS = _env_bool("BREAK_TIES_WITH_TRAITS", BREAK_TIES_WITH_TRAITS)
INCLUDE_VISUALIZATIONS = _env_bool("INCLUDE_VISUALIZATIONS", INCLUDE_VISUALIZATIONS)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)
CATALOGUE_PATH: Optional[str] = os.getenv("ARCHETYPE_CATALOGUE") or None


@dataclass(frozen=True)
class ScoringConfig:
    """Tolerances and switches for one scoring call.

    Instances are immutable; use :meth:`with_overrides` to derive a variant
    so concurrent calls with different tolerances never share state.
    """

    tie_tolerance: float = TIE_TOLERANCE
    minimum_variance: float = MINIMUM_VARIANCE
    confidence_strong: float = CONFIDENCE_STRONG
    confidence_moderate: float = CONFIDENCE_MODERATE
    score_epsilon: float = SCORE_EPSILON
    break_ties_with_traits: bool = BREAK_TIES_WITH_TRAITS
    include_visualizations: bool = INCLUDE_VISUALIZATIONS
    debug_trace: bool = DEBUG_TRACE

    def __post_init__(self) -> None:
        if not 0.0 <= float(self.tie_tolerance) < 1.0:
            raise ValueError(f"tie_tolerance must be in [0, 1), got {self.tie_tolerance!r}")
        if float(self.minimum_variance) < 0.0:
            raise ValueError(f"minimum_variance must be >= 0, got {self.minimum_variance!r}")
        if not 0.0 <= self.confidence_moderate <= self.confidence_strong <= 1.0:
            raise ValueError("confidence thresholds must satisfy 0 <= moderate <= strong <= 1")

    def with_overrides(self, **overrides: Any) -> "ScoringConfig":
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_FILE_KEYS = {
    "tieTolerance": "tie_tolerance",
    "minimumVariance": "minimum_variance",
    "confidenceStrong": "confidence_strong",
    "confidenceModerate": "confidence_moderate",
    "breakTiesWithTraits": "break_ties_with_traits",
    "includeVisualizations": "include_visualizations",
}


def load_config(path: str | pathlib.Path = "scoring_config.json") -> ScoringConfig:
    """Build a :class:`ScoringConfig` from an optional JSON file plus env.

    Unknown keys in the file are ignored; a missing or unreadable file
    yields the module defaults.  Environment variables win over the file.
    """

    cfg: Dict[str, Any] = {}
    p = pathlib.Path(path)
    if p.exists():
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            raw = {}
        if isinstance(raw, dict):
            for key, val in raw.items():
                name = _FILE_KEYS.get(key, key)
                if name not in _FILE_KEYS.values():
                    continue
                if name in ("break_ties_with_traits", "include_visualizations"):
                    cfg[name] = bool(val)
                else:
                    try:
                        cfg[name] = float(val)
                    except (TypeError, ValueError):
                        continue
    e = os.environ
    if e.get("TIE_TOLERANCE"): cfg["tie_tolerance"] = _env_float("TIE_TOLERANCE", TIE_TOLERANCE)
    if e.get("MINIMUM_VARIANCE"): cfg["minimum_variance"] = _env_float("MINIMUM_VARIANCE", MINIMUM_VARIANCE)
    if e.get("BREAK_TIES_WITH_TRAITS"): cfg["break_ties_with_traits"] = _env_bool("BREAK_TIES_WITH_TRAITS", True)
    if e.get("INCLUDE_VISUALIZATIONS"): cfg["include_visualizations"] = _env_bool("INCLUDE_VISUALIZATIONS", True)
    if e.get("DEBUG_TRACE"): cfg["debug_trace"] = _env_bool("DEBUG_TRACE", False)
    return ScoringConfig(**cfg)
