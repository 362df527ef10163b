"""Locating named caches on disk.

Callers that do not want to manage file paths can open a cache by name::

    from flatcache.config import open_named

    cache = open_named("embeddings").unwrap()

Named caches live in the user cache directory: XDG Base Directory
compliant on Linux/BSD (``$XDG_CACHE_HOME/flatcache/``, default
``~/.cache/flatcache/``) and ``~/.flatcache/cache/`` on macOS and Windows.

Settings precedence (high to low):
    1. Explicit arguments to :func:`resolve_settings`
    2. Environment variables (``FLATCACHE_DIR``, ``FLATCACHE_AUTO_UPDATE``)
    3. :class:`~flatcache.models.CacheSettings` defaults
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional, Union

from flatcache.cache import Cache, load
from flatcache.exceptions import CacheError, ConfigError
from flatcache.models import CacheSettings
from flatcache.result import Result

_APP_NAME = "flatcache"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Returns:
        Absolute path to the cache directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CACHE_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".cache"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Settings ---


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}")


def resolve_settings(
    directory: Optional[Union[str, Path]] = None,
    auto_update: Optional[bool] = None,
) -> CacheSettings:
    """Merge explicit arguments, environment variables, and defaults.

    Raises:
        ConfigError: If ``FLATCACHE_AUTO_UPDATE`` is not a recognised boolean.
    """
    settings = CacheSettings()

    env_dir = os.environ.get("FLATCACHE_DIR")
    if env_dir:
        settings.directory = Path(env_dir).expanduser()
    env_auto = os.environ.get("FLATCACHE_AUTO_UPDATE")
    if env_auto:
        settings.auto_update = _parse_bool("FLATCACHE_AUTO_UPDATE", env_auto)

    if directory is not None:
        settings.directory = Path(directory).expanduser()
    if auto_update is not None:
        settings.auto_update = auto_update
    return settings


def cache_path(name: str, settings: Optional[CacheSettings] = None) -> Path:
    """Return the backing file path for the cache called *name*.

    Raises:
        ConfigError: If *name* is empty or contains a path separator.
    """
    if not name or name in (".", "..") or "/" in name or os.sep in name:
        raise ConfigError(f"Invalid cache name: {name!r}")
    if settings is None:
        settings = resolve_settings()
    directory = settings.directory if settings.directory is not None else get_cache_dir()
    return directory / f"{name}{settings.suffix}"


def open_named(
    name: str, settings: Optional[CacheSettings] = None
) -> Result[Cache, CacheError]:
    """Load the cache called *name* from the configured directory.

    The directory itself is not created when set explicitly; a missing
    directory yields ``Err(FileOpenError)``.
    """
    if settings is None:
        settings = resolve_settings()
    return load(cache_path(name, settings), auto_update=settings.auto_update)
