from __future__ import annotations
import json, math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from . import config
from .errors import CatalogueError
from .types import (
    TRAIT_DIMENSIONS,
    SIGNED_DIMENSIONS,
    AdHocArchetype,
    ArchetypeEntry,
    CataloguedArchetype,
    TraitProfile,
)
from .vectors import norm

_DEFAULT_PATH = Path(__file__).with_name("archetypes.json")


class TraitCatalogue(Mapping[str, TraitProfile]):
    """Read-only archetype id -> :class:`TraitProfile` mapping.

    Order follows the source file; score maps are initialised in this order.
    Safe to share between concurrent scoring calls.
    """

    def __init__(self, profiles: Mapping[str, TraitProfile], names: Optional[Mapping[str, str]] = None):
        self._profiles = MappingProxyType(dict(profiles))
        self._names = MappingProxyType(dict(names or {}))
        self._norms = MappingProxyType({k: norm(p.as_vector()) for k, p in self._profiles.items()})

    def __getitem__(self, archetype_id: str) -> TraitProfile:
        return self._profiles[archetype_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def ids(self) -> List[str]:
        return list(self._profiles)

    def profile(self, archetype_id: str) -> Optional[TraitProfile]:
        return self._profiles.get(archetype_id)

    def profile_norm(self, archetype_id: str) -> Optional[float]:
        return self._norms.get(archetype_id)

    def display_name(self, archetype_id: str) -> str:
        return self._names.get(archetype_id, archetype_id)

    def resolve(self, archetype_id: str) -> ArchetypeEntry:
        prof = self._profiles.get(archetype_id)
        if prof is None:
            return AdHocArchetype(id=archetype_id)
        return CataloguedArchetype(id=archetype_id, profile=prof)

    def to_list(self) -> List[Dict[str, Any]]:
        return [
            {"id": k, "name": self.display_name(k), "profile": p.to_dict()}
            for k, p in self._profiles.items()
        ]


def _check_value(archetype_id: str, dim: str, raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise CatalogueError(f"{archetype_id}: {dim} must be a number, got {raw!r}")
    val = float(raw)
    lo = -1.0 if dim in SIGNED_DIMENSIONS else 0.0
    if math.isnan(val) or not lo <= val <= 1.0:
        raise CatalogueError(f"{archetype_id}: {dim}={val} outside [{lo:g}, 1]")
    return val


def build_catalogue(entries: Sequence[Mapping[str, Any]]) -> TraitCatalogue:
    """Validate raw ``{id, name?, profile}`` entries and build a catalogue."""

    profiles: Dict[str, TraitProfile] = {}
    names: Dict[str, str] = {}
    for idx, entry in enumerate(entries):
        aid = entry.get("id") if isinstance(entry, Mapping) else None
        if not isinstance(aid, str) or not aid:
            raise CatalogueError(f"catalogue entry at index {idx} missing id")
        if aid in profiles:
            raise CatalogueError(f"duplicate archetype id: {aid}")
        prof = entry.get("profile")
        if not isinstance(prof, Mapping):
            raise CatalogueError(f"{aid}: missing trait profile")
        missing = [d for d in TRAIT_DIMENSIONS if d not in prof]
        if missing:
            raise CatalogueError(f"{aid}: profile missing {', '.join(missing)}")
        profiles[aid] = TraitProfile(**{d: _check_value(aid, d, prof[d]) for d in TRAIT_DIMENSIONS})
        if entry.get("name"):
            names[aid] = str(entry["name"])
    return TraitCatalogue(profiles, names)


def load_catalogue(path: str | Path | None = None) -> TraitCatalogue:
    p = Path(path) if path else _DEFAULT_PATH
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CatalogueError(f"cannot read catalogue {p}: {exc}") from exc
    if isinstance(raw, Mapping):
        raw = raw.get("archetypes", [])
    if not isinstance(raw, list):
        raise CatalogueError(f"catalogue {p} must be a list of archetypes")
    return build_catalogue(raw)


_DEFAULT_CACHE: Optional[TraitCatalogue] = None


def default_catalogue() -> TraitCatalogue:
    """Lazy-load the shipped catalogue (or ``ARCHETYPE_CATALOGUE``) once."""

    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = load_catalogue(config.CATALOGUE_PATH)
    return _DEFAULT_CACHE
