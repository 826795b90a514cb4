from __future__ import annotations

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")


def test_only_core_package_is_installed():
    text = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
    data = tomllib.loads(text)
    assert data["tool"]["setuptools"]["packages"]["find"]["include"] == ["archetype_core*"]
    assert data["tool"]["setuptools"]["package-data"]["archetype_core"] == ["*.json"]
