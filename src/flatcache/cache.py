"""File-backed key-value cache.

A :class:`Cache` is an ordered, immutable list of ``(key, value)`` string
pairs mirrored to a single text file.  Every operation returns a new
:class:`Cache` (or a :class:`~flatcache.result.Result` wrapping one), so a
sequence of updates reads as a chain::

    from flatcache import load

    result = (
        load("results.cache", auto_update=True)
        .and_then(lambda c: c.set("model", "resnet50"))
        .and_then(lambda c: c.defaults([("epochs", "10")]))
    )
    cache = result.unwrap()

With ``auto_update`` enabled each successful mutation rewrites the whole
file.  The file is truncated and written in place, then fsynced, so
symlinks and hard links to it always see the current state.  Batch
operations persist once per pair; to write once, disable auto-update,
apply the batch, then call :meth:`Cache.flush`.

Failures are returned as :class:`~flatcache.result.Err` values rather than
raised.  See :mod:`flatcache.chain` for versions of every operation that
accept a result and pass errors through untouched.
"""

from __future__ import annotations

import logging
import os
from functools import partial
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from flatcache.codec import Codec, Entry, LineCodec
from flatcache.exceptions import (
    CacheError,
    FileOpenError,
    FileReadError,
    FileWriteError,
    InvariantViolationError,
)
from flatcache.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
_READ_CHUNK_SIZE = 64 * 1024

Pairs = Union[Iterable[Entry], Mapping[str, str]]


def _error(cls: type[CacheError], message: str, path: Path, cause: BaseException) -> Err:
    """Build an ``Err`` whose exception chains to the underlying *cause*."""
    reason = getattr(cause, "strerror", None) or cause
    error = cls(f"{message} {path}: {reason}", path)
    error.__cause__ = cause
    return Err(error)


def _pairs(entries: Pairs) -> Iterable[Entry]:
    if isinstance(entries, Mapping):
        return entries.items()
    return entries


# --- File I/O ---


def _create_empty(path: Path) -> Result[None, CacheError]:
    try:
        with open(path, "x", encoding=_ENCODING):
            pass
    except FileExistsError:
        # Created between our failed open and now; the retry will read it.
        return Ok(None)
    except OSError as exc:
        return _error(FileOpenError, "Cannot create cache file", path, exc)
    logger.debug("Created empty cache file %s", path)
    return Ok(None)


def _read_file(path: Path, create_missing: bool = True) -> Result[str, CacheError]:
    """Read the whole file, creating it empty (once) if it does not exist."""
    try:
        handle = open(path, "r", encoding=_ENCODING, newline="")
    except FileNotFoundError as exc:
        if not create_missing:
            return _error(FileOpenError, "Cannot open cache file", path, exc)
        created = _create_empty(path)
        if created.is_err():
            return created
        return _read_file(path, create_missing=False)
    except OSError as exc:
        return _error(FileOpenError, "Cannot open cache file", path, exc)

    try:
        with handle:
            # read() may return less than the whole file; loop to EOF
            chunks = list(iter(partial(handle.read, _READ_CHUNK_SIZE), ""))
    except (OSError, UnicodeDecodeError) as exc:
        return _error(FileReadError, "Cannot read cache file", path, exc)
    return Ok("".join(chunks))


def _fsync_dir(directory: str) -> None:
    dfd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(dfd)
    finally:
        os.close(dfd)


def _write_file(path: Path, data: str) -> Result[None, CacheError]:
    """Truncate *path*, write *data*, fsync, and close.

    The file is written in place, so symlinks and hard links to it keep
    pointing at the updated content.  The parent directory is never
    created, but on POSIX it is fsynced so a file recreated by this write
    survives a crash.
    """
    try:
        handle = open(path, "w", encoding=_ENCODING, newline="")
    except OSError as exc:
        return _error(FileOpenError, "Cannot open cache file for writing", path, exc)

    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if os.name == "posix":
            _fsync_dir(os.path.dirname(os.path.realpath(path)))
    except (OSError, UnicodeEncodeError) as exc:
        return _error(FileWriteError, "Cannot write cache file", path, exc)
    return Ok(None)


# --- Cache ---


class Cache(BaseModel):
    """An ordered string-to-string mapping mirrored to one text file.

    Instances are frozen; mutations return new instances.  Keys are unique
    within :attr:`entries`: setting an existing key replaces its value in
    place.

    Attributes:
        file_path: The backing file.  Fixed for the lifetime of the cache.
        entries: ``(key, value)`` pairs in insertion order.
        auto_update: When true, every successful mutation rewrites
            :attr:`file_path` before returning.
        codec: Converts between :attr:`entries` and file text.  Defaults to
            :class:`~flatcache.codec.LineCodec`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    file_path: Path
    entries: tuple[tuple[str, str], ...] = ()
    auto_update: bool = False
    codec: Any = Field(default_factory=LineCodec, exclude=True, repr=False)

    # --- queries ---

    def _position(self, key: str) -> Optional[int]:
        """Index of *key* in :attr:`entries`, or ``None`` if absent.

        Raises:
            InvariantViolationError: If *key* appears more than once.
        """
        found: Optional[int] = None
        for index, (entry_key, _) in enumerate(self.entries):
            if entry_key != key:
                continue
            if found is not None:
                raise InvariantViolationError(
                    f"Duplicate key {key!r} in cache {self.file_path}", self.file_path
                )
            found = index
        return found

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None``.

        Raises:
            InvariantViolationError: If *key* appears more than once.
        """
        position = self._position(key)
        if position is None:
            return None
        return self.entries[position][1]

    def get_or(self, key: str, fallback: str) -> str:
        value = self.get(key)
        return fallback if value is None else value

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def to_dict(self) -> dict[str, str]:
        return dict(self.entries)

    def has(self, key: str) -> bool:
        """Whether *key* is present.  Unlike :meth:`get`, never raises."""
        return any(entry_key == key for entry_key, _ in self.entries)

    # --- persistence ---

    def update(self) -> Result["Cache", CacheError]:
        """Write every entry to :attr:`file_path`, replacing its contents.

        Runs regardless of :attr:`auto_update`.

        Returns:
            ``Ok(self)`` once the data is synced to disk, otherwise an
            ``Err`` with :class:`~flatcache.exceptions.FileOpenError` or
            :class:`~flatcache.exceptions.FileWriteError`.
        """
        written = _write_file(self.file_path, self.codec.encode(self.entries))
        if written.is_err():
            return written
        logger.debug("Wrote %d entries to %s", len(self.entries), self.file_path)
        return Ok(self)

    def flush(self) -> Result["Cache", CacheError]:
        """Alias of :meth:`update`."""
        return self.update()

    def set_auto_update(self) -> "Cache":
        """Return a cache that persists after every mutation.

        Does not write the current state; only later mutations are affected.
        """
        if self.auto_update:
            return self
        return self.model_copy(update={"auto_update": True})

    def disable_auto_update(self) -> "Cache":
        if not self.auto_update:
            return self
        return self.model_copy(update={"auto_update": False})

    def _commit(self, entries: tuple[Entry, ...]) -> Result["Cache", CacheError]:
        cache = self.model_copy(update={"entries": entries})
        if cache.auto_update:
            return cache.update()
        return Ok(cache)

    # --- mutations ---

    def set(self, key: str, value: str) -> Result["Cache", CacheError]:
        """Store *value* under *key*.

        An existing key keeps its position; a new key is appended.
        """
        try:
            position = self._position(key)
        except InvariantViolationError as exc:
            return Err(exc)

        entries = list(self.entries)
        if position is None:
            entries.append((key, value))
        else:
            entries[position] = (key, value)
        return self._commit(tuple(entries))

    def remove(self, key: str) -> Result["Cache", CacheError]:
        """Delete *key*.  Removing an absent key returns ``Ok(self)`` without writing."""
        try:
            position = self._position(key)
        except InvariantViolationError as exc:
            return Err(exc)

        if position is None:
            return Ok(self)
        return self._commit(self.entries[:position] + self.entries[position + 1:])

    def set_many(self, entries: Pairs) -> Result["Cache", CacheError]:
        """Apply :meth:`set` for each pair in order.

        Later pairs override earlier ones for the same key.  Stops at the
        first error; the remaining pairs are not applied.
        """
        cache = self
        for key, value in _pairs(entries):
            result = cache.set(key, value)
            if result.is_err():
                return result
            cache = result.value
        return Ok(cache)

    def defaults(self, entries: Pairs) -> Result["Cache", CacheError]:
        """Set each pair only if its key is not already present.

        Presence is checked against the state built up so far, so the
        first of two defaults for the same key wins.
        """
        cache = self
        for key, value in _pairs(entries):
            if cache.has(key):
                continue
            result = cache.set(key, value)
            if result.is_err():
                return result
            cache = result.value
        return Ok(cache)


# --- Construction ---


def load(
    path: Union[str, os.PathLike],
    auto_update: bool = False,
    codec: Optional[Codec] = None,
) -> Result[Cache, CacheError]:
    """Load the cache stored at *path*.

    A missing file is created empty and opened again, once.  Lines the
    codec cannot parse are skipped.

    Args:
        path: The backing file.
        auto_update: Persist after every successful mutation.
        codec: Alternative :class:`~flatcache.codec.Codec`.

    Returns:
        ``Ok(Cache)``, or ``Err`` with
        :class:`~flatcache.exceptions.FileOpenError` if the file cannot be
        opened or created, or :class:`~flatcache.exceptions.FileReadError`
        if its contents cannot be read.
    """
    file_path = Path(path)
    if codec is None:
        codec = LineCodec()

    text = _read_file(file_path)
    if text.is_err():
        return text

    entries = tuple(codec.decode(text.value))
    logger.debug("Loaded %d entries from %s", len(entries), file_path)
    return Ok(
        Cache(file_path=file_path, entries=entries, auto_update=auto_update, codec=codec)
    )


new = load
