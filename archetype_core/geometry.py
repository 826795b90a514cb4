from __future__ import annotations
import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from .types import SIGNED_DIMENSIONS, TRAIT_DIMENSIONS, DistributionEntry, RadarPoint, TraitProfile


def _value_of(values: Union[Mapping[str, float], TraitProfile], dim: str) -> float:
    if isinstance(values, TraitProfile):
        return float(getattr(values, dim))
    return float(values.get(dim, 0.0) or 0.0)


def radar_coordinates(
    values: Union[Mapping[str, float], TraitProfile],
    dimensions: Optional[Sequence[str]] = TRAIT_DIMENSIONS,
    signed_dimensions: Sequence[str] = SIGNED_DIMENSIONS,
) -> List[RadarPoint]:
    """
    Axis i of N sits at θ = (i/N)·2π with radius = value.
    Dimensions in ``signed_dimensions`` are mapped from [-1, 1] to [0, 1]
    via (v+1)/2 first.  Pass ``dimensions=None`` to use the mapping's own
    key order (e.g. a score map).
    """
    dims = list(dimensions) if dimensions is not None else list(values)  # type: ignore[arg-type]
    n = len(dims)
    out: List[RadarPoint] = []
    for i, dim in enumerate(dims):
        raw = _value_of(values, dim)
        r = (raw + 1.0) / 2.0 if dim in signed_dimensions else raw
        theta = (i / n) * 2.0 * math.pi
        out.append(RadarPoint(
            dimension=dim,
            angle=theta,
            angle_degrees=math.degrees(theta),
            radius=r,
            raw_value=raw,
            x=r * math.cos(theta),
            y=r * math.sin(theta),
        ))
    return out


def _xy(p: Any) -> tuple[float, float]:
    if isinstance(p, Mapping):
        return float(p["x"]), float(p["y"])
    if isinstance(p, RadarPoint):
        return p.x, p.y
    x, y = p
    return float(x), float(y)


def polygon_area(points: Sequence[Any]) -> float:
    """Shoelace area ½|Σ(xᵢyᵢ₊₁ − xᵢ₊₁yᵢ)| with wraparound.

    Accepts :class:`RadarPoint`s, ``{"x", "y"}`` mappings or ``(x, y)`` pairs.
    """
    xy = [_xy(p) for p in points]
    n = len(xy)
    area = 0.0
    for i in range(n):
        x0, y0 = xy[i]
        x1, y1 = xy[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return abs(area) / 2.0


def score_distribution(scores: Mapping[str, float]) -> List[DistributionEntry]:
    total = sum(float(s) for s in scores.values())
    ordered = sorted(scores.items(), key=lambda kv: -float(kv[1]))
    if total == 0:
        return [DistributionEntry(aid, float(s), 0.0) for aid, s in ordered]
    return [DistributionEntry(aid, float(s), float(s) / total * 100.0) for aid, s in ordered]
