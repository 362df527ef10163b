"""Line-oriented text codec for cache files.

Each entry occupies one line::

    !<key>=<value>

The leading ``!`` is a sentinel: any line without it (blank lines,
comments, corrupted data) is skipped on decode.  The key runs up to the
first ``=``; everything after it is the value, so values may contain
``=`` (base64 padding, URLs with query strings) but keys may not.

Newlines inside keys or values are not supported and decode
unpredictably.

A cache can be given any object satisfying :class:`Codec`; the module-level
:func:`decode` and :func:`encode` are the default :class:`LineCodec`.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable

SENTINEL = "!"
SEPARATOR = "="

Entry = tuple[str, str]


@runtime_checkable
class Codec(Protocol):
    """A pair of pure functions converting between file text and entries."""

    def decode(self, text: str) -> list[Entry]:
        ...

    def encode(self, entries: Iterable[Entry]) -> str:
        ...


def decode_line(line: str) -> Optional[Entry]:
    """Parse a single line, returning ``None`` if it is not an entry."""
    if not line.startswith(SENTINEL):
        return None
    key, sep, value = line[len(SENTINEL):].partition(SEPARATOR)
    if not sep:
        return None
    return key, value


def encode_entry(key: str, value: str) -> str:
    """Serialise one entry, including its trailing newline."""
    return f"{SENTINEL}{key}{SEPARATOR}{value}\n"


def decode(text: str) -> list[Entry]:
    """Parse file text into an ordered list of ``(key, value)`` pairs.

    Args:
        text: The full file contents.

    Returns:
        Entries in file order.  Unparseable lines are discarded.
    """
    lines = text.split("\n")
    # A final newline leaves one empty trailing segment
    if lines and lines[-1] == "":
        lines.pop()

    entries: list[Entry] = []
    for line in lines:
        entry = decode_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def encode(entries: Iterable[Entry]) -> str:
    """Serialise entries in order; an empty iterable yields ``""``."""
    return "".join(encode_entry(key, value) for key, value in entries)


class LineCodec:
    """The default ``!key=value`` codec as a :class:`Codec` object."""

    def decode(self, text: str) -> list[Entry]:
        return decode(text)

    def encode(self, entries: Iterable[Entry]) -> str:
        return encode(entries)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LineCodec)

    def __hash__(self) -> int:
        return hash(LineCodec)

    def __repr__(self) -> str:
        return "LineCodec()"
