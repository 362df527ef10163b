"""Exception hierarchy for flatcache.

All exceptions inherit from :class:`FlatcacheError`.  Cache operations do
not raise these directly: they return them inside an
:class:`~flatcache.result.Err` so that chains of mutations can be composed
without ``try`` blocks.  Calling :meth:`~flatcache.result.Err.unwrap` on an
error result raises the carried exception.

Subclass hierarchy::

    FlatcacheError
    +-- ConfigError
    +-- CacheError
        +-- FileOpenError
        +-- FileReadError
        +-- FileWriteError
        +-- InvariantViolationError
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FlatcacheError(Exception):
    """Base exception for all flatcache errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(FlatcacheError):
    """Raised for configuration problems (bad env values, invalid cache names)."""


class CacheError(FlatcacheError):
    """Base class for failures of a cache operation.

    Args:
        message: Human-readable error description.
        path: The backing file involved, when known.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.message == other.message and self.path == other.path

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.path))


class FileOpenError(CacheError):
    """The backing file could not be opened or created."""


class FileReadError(CacheError):
    """An I/O or decoding error occurred while reading the backing file."""


class FileWriteError(CacheError):
    """An I/O error occurred while writing, syncing, or replacing the backing file."""


class InvariantViolationError(CacheError):
    """More than one entry exists for the same key.

    Mutation operations keep keys unique, so this only happens when a file
    was edited by hand or written by an incompatible writer.  Treat it as a
    programming-contract error rather than a transient condition.
    """
