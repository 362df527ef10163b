"""Shared test fixtures for flatcache.

Provides a disposable backing file, pre-loaded caches, and an isolated
environment for tests that resolve named caches through XDG paths.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from flatcache import Cache, load


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    """Path to a cache file that does not exist yet."""
    return tmp_path / "test_file.txt"


@pytest.fixture
def cache(cache_file: Path) -> Cache:
    """An empty in-memory cache (auto-update off) backed by *cache_file*."""
    return load(cache_file).unwrap()


@pytest.fixture
def auto_cache(cache_file: Path) -> Cache:
    """An empty cache that persists after every mutation."""
    return load(cache_file, auto_update=True).unwrap()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate the user cache directory to a temporary directory.

    Sets XDG_CACHE_HOME under tmp_path, forces XDG path resolution, and
    clears all FLATCACHE_* environment variables.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("flatcache.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in ["FLATCACHE_DIR", "FLATCACHE_AUTO_UPDATE"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path
