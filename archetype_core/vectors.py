"""Vector helpers shared by trait inference and tie breaking.

Vectors are plain sequences of floats.
"""
from __future__ import annotations

import math
from typing import Sequence

from .errors import DimensionMismatchError

__all__ = [
    "norm",
    "dot",
    "cosine_similarity",
]


def norm(v: Sequence[float]) -> float:
    """Return the Euclidean norm ``sqrt(Σ vᵢ²)``; the empty vector has norm 0."""

    return math.sqrt(sum(float(x) * float(x) for x in v))


def dot(u: Sequence[float], v: Sequence[float]) -> float:
    """Dot product of two equal-length vectors.

    Raises
    ------
    DimensionMismatchError
        If ``len(u) != len(v)``.
    """

    if len(u) != len(v):
        raise DimensionMismatchError(len(u), len(v))
    return sum(float(a) * float(b) for a, b in zip(u, v))


def cosine_similarity(u: Sequence[float], v: Sequence[float]) -> float:
    """Compute ``(u·v) / (‖u‖·‖v‖)``.

    Parameters
    ----------
    u, v: sequence of float
        Vectors of identical length.

    Returns
    -------
    float
        Similarity in ``[-1, 1]`` (up to rounding).  A zero-norm operand is
        treated as orthogonal to everything and yields ``0.0`` rather than
        NaN.
    """

    d = dot(u, v)
    nu = norm(u)
    nv = norm(v)
    if nu == 0.0 or nv == 0.0:
        return 0.0
    return d / (nu * nv)
