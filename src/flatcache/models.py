"""Pydantic models for flatcache configuration.

:class:`CacheSettings` describes where named caches live and how they
persist.  It is produced by :func:`~flatcache.config.resolve_settings`
and consumed by :func:`~flatcache.config.open_named`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class CacheSettings(BaseModel):
    """Settings for caches opened by name.

    Example::

        CacheSettings(directory=Path("/tmp/results"), auto_update=False)
    """

    directory: Optional[Path] = Field(
        default=None,
        description="Directory holding named cache files (None = XDG cache dir)",
    )
    auto_update: bool = Field(
        default=True,
        description="Persist after every successful mutation",
    )
    suffix: str = Field(default=".cache", description="File name suffix for named caches")
