from __future__ import annotations

import json

import pytest

from archetype_core import config
from archetype_core.config import ScoringConfig, load_config

_ENV_KEYS = ("TIE_TOLERANCE", "MINIMUM_VARIANCE", "BREAK_TIES_WITH_TRAITS", "INCLUDE_VISUALIZATIONS", "DEBUG_TRACE")


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults_without_file(clean_env, tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    assert cfg == ScoringConfig()
    assert cfg.tie_tolerance == config.TIE_TOLERANCE
    assert cfg.score_epsilon == pytest.approx(1e-4)


def test_file_values_are_read(clean_env, tmp_path):
    path = tmp_path / "scoring_config.json"
    path.write_text(json.dumps({"tieTolerance": 0.1, "breakTiesWithTraits": False, "colour": "blue"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.tie_tolerance == pytest.approx(0.1)
    assert cfg.break_ties_with_traits is False


def test_env_wins_over_file(clean_env, tmp_path):
    path = tmp_path / "scoring_config.json"
    path.write_text(json.dumps({"tieTolerance": 0.1}), encoding="utf-8")
    clean_env.setenv("TIE_TOLERANCE", "0.2")
    clean_env.setenv("DEBUG_TRACE", "yes")
    cfg = load_config(path)
    assert cfg.tie_tolerance == pytest.approx(0.2)
    assert cfg.debug_trace is True


def test_unreadable_file_falls_back(clean_env, tmp_path):
    path = tmp_path / "scoring_config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == ScoringConfig()


def test_out_of_range_values_rejected(clean_env, tmp_path):
    with pytest.raises(ValueError):
        ScoringConfig(tie_tolerance=1.0)
    with pytest.raises(ValueError):
        ScoringConfig(minimum_variance=-0.1)
    with pytest.raises(ValueError):
        ScoringConfig(confidence_strong=0.1, confidence_moderate=0.3)

    path = tmp_path / "scoring_config.json"
    path.write_text(json.dumps({"tieTolerance": -0.5}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_overrides_derive_new_instance():
    base = ScoringConfig()
    assert base.with_overrides(tie_tolerance=None) is base
    derived = base.with_overrides(tie_tolerance=0.25, include_visualizations=False)
    assert derived.tie_tolerance == 0.25
    assert derived.include_visualizations is False
    assert base.tie_tolerance == config.TIE_TOLERANCE
    assert derived.to_dict()["tie_tolerance"] == 0.25
    with pytest.raises(AttributeError):
        base.tie_tolerance = 0.3  # type: ignore[misc]
