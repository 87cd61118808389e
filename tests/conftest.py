"""Shared fixtures for places tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from places.infrastructure.data.cache import DiskCache
from tests.fakes import StaticConnectivity


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    d = tmp_path / "cache"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture
def disk_cache(cache_dir: Path):
    cache = DiskCache(cache_dir=cache_dir)
    yield cache
    cache.close()


@pytest.fixture
def connected() -> StaticConnectivity:
    return StaticConnectivity(True)


@pytest.fixture
def offline() -> StaticConnectivity:
    return StaticConnectivity(False)


@pytest.fixture
def no_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point config at an empty project root so a developer .env cannot leak in."""
    monkeypatch.setattr("places.utils.config._project_root", lambda: tmp_path)
