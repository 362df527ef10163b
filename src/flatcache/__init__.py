"""flatcache -- a persistent key-value cache stored in one flat text file.

Intended for caching expensive computation results across process runs.
The whole cache is an ordered list of string pairs held in memory and
mirrored to a file with one ``!key=value`` line per entry.

Typical usage::

    from flatcache import load

    cache = load("results.cache", auto_update=True).unwrap()
    cache = cache.set("checksum", "9f86d08").unwrap()
    cache.get("checksum")

Modules:
    cache: The :class:`Cache` value, :func:`load`, and persistence.
    chain: Operations lifted over results for error-free chaining.
    codec: The line format and the pluggable :class:`Codec` protocol.
    config: Named caches in the user cache directory.
    exceptions: Error hierarchy.
    models: Pydantic settings models.
    result: :class:`Ok` and :class:`Err` result values.
"""

from flatcache import chain
from flatcache.cache import Cache, load, new
from flatcache.codec import Codec, LineCodec, decode, encode
from flatcache.exceptions import (
    CacheError,
    ConfigError,
    FileOpenError,
    FileReadError,
    FileWriteError,
    FlatcacheError,
    InvariantViolationError,
)
from flatcache.result import Err, Ok, Result

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "CacheError",
    "Codec",
    "ConfigError",
    "Err",
    "FileOpenError",
    "FileReadError",
    "FileWriteError",
    "FlatcacheError",
    "InvariantViolationError",
    "LineCodec",
    "Ok",
    "Result",
    "chain",
    "decode",
    "encode",
    "load",
    "new",
]
