"""Cache operations lifted over :data:`~flatcache.result.Result`.

Each function takes the result of a previous step as its first argument.
An ``Err`` passes through unchanged and the operation is skipped; an
``Ok`` has the operation applied to its cache.  This lets a sequence of
updates be written without checking each step::

    from flatcache import chain, load

    result = load("results.cache", auto_update=True)
    result = chain.set(result, "a", "A")
    result = chain.defaults(result, [("default", "1"), ("a", "abc")])
    result = chain.remove(result, "stale")
    greeting = chain.get_or(result, "msg", "hello")
"""

from __future__ import annotations

from typing import Optional

from flatcache.cache import Cache, Pairs
from flatcache.exceptions import CacheError, InvariantViolationError
from flatcache.result import Result

__all__ = [
    "defaults",
    "disable_auto_update",
    "flush",
    "get",
    "get_or",
    "remove",
    "set",
    "set_auto_update",
    "set_many",
    "update",
]

CacheResult = Result[Cache, CacheError]


def get(result: CacheResult, key: str) -> Optional[str]:
    """Value under *key*, or ``None`` if absent or unavailable.

    Unavailable covers an ``Err`` *result* and a cache holding *key* more
    than once.  Use :meth:`Cache.get` directly to see the duplicate as an
    :class:`~flatcache.exceptions.InvariantViolationError`.
    """
    if result.is_err():
        return None
    try:
        return result.value.get(key)
    except InvariantViolationError:
        return None


def get_or(result: CacheResult, key: str, fallback: str) -> str:
    """Value under *key*, or *fallback* if absent or unavailable (see :func:`get`)."""
    value = get(result, key)
    return fallback if value is None else value


def set(result: CacheResult, key: str, value: str) -> CacheResult:
    return result.and_then(lambda cache: cache.set(key, value))


def remove(result: CacheResult, key: str) -> CacheResult:
    return result.and_then(lambda cache: cache.remove(key))


def set_many(result: CacheResult, entries: Pairs) -> CacheResult:
    return result.and_then(lambda cache: cache.set_many(entries))


def defaults(result: CacheResult, entries: Pairs) -> CacheResult:
    return result.and_then(lambda cache: cache.defaults(entries))


def update(result: CacheResult) -> CacheResult:
    return result.and_then(lambda cache: cache.update())


def flush(result: CacheResult) -> CacheResult:
    return update(result)


def set_auto_update(result: CacheResult) -> CacheResult:
    return result.map(lambda cache: cache.set_auto_update())


def disable_auto_update(result: CacheResult) -> CacheResult:
    return result.map(lambda cache: cache.disable_auto_update())
