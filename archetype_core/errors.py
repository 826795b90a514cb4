"""Exceptions raised by the scoring pipeline.

Unknown response references and missing trait profiles are not errors:
they are logged and skipped.  Everything here is fatal to the call that
raised it.
"""
from __future__ import annotations

__all__ = [
    "ScoringError",
    "NoValidScoresError",
    "DivideByZeroError",
    "ScoreOverflowError",
    "DimensionMismatchError",
    "CatalogueError",
]


class ScoringError(Exception):
    """Base class for failures raised by the scoring pipeline."""


class NoValidScoresError(ScoringError):
    """Every archetype scored exactly zero; there is nothing to rank."""


class DivideByZeroError(ScoringError, ZeroDivisionError):
    """Total question weight is zero, so scores cannot be normalised."""


class ScoreOverflowError(NoValidScoresError, OverflowError):
    """Weighted points overflowed to a non-finite score."""


class DimensionMismatchError(ScoringError, ValueError):
    """Two vectors of different length were compared."""

    def __init__(self, left: int, right: int):
        super().__init__(f"vectors must have the same dimensionality ({left} != {right})")
        self.left = left
        self.right = right


class CatalogueError(ScoringError, ValueError):
    """The archetype trait catalogue is malformed."""
