"""Data models shared by the line classifier and the entry tokenizer.

A ``Slice`` is a byte-offset range into a backing buffer and carries no text of
its own. A parsed line is exactly one of the ``Line`` variants below; entry
lines wrap a ``DictEntry`` whose fields are slices into the same buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from cedict_lines.parser.entry import DictEntry
    from cedict_lines.parser.scanner import ScanFailure


@dataclass(frozen=True)
class Slice:
    """Half-open ``[start, end)`` byte range into a backing text buffer.

    Only the ordering of the offsets is checked here. Whether the range fits
    the buffer and lands on UTF-8 character boundaries is checked by the text
    source the slice is used against (see ``TextSource.check_span``).
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid slice bounds ({self.start}, {self.end})")

    @property
    def length(self) -> int:
        """Return the number of bytes covered by the slice."""

        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, other: Slice) -> bool:
        """Return whether ``other`` lies entirely within this slice."""

        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Empty:
    """A zero-length line."""


@dataclass(frozen=True)
class Comment:
    """A ``#`` line; ``text`` is everything after the ``#``, trimmed."""

    text: str


@dataclass(frozen=True)
class Metadata:
    """A ``#! key=value`` directive with both sides trimmed.

    A directive without ``=`` keeps its whole trimmed body as ``key`` and an
    empty ``value``.
    """

    key: str
    value: str


@dataclass(frozen=True)
class Entry:
    """A well-formed dictionary entry line."""

    entry: DictEntry


@dataclass(frozen=True)
class Incorrect:
    """A line that reached the entry tokenizer and failed.

    Attributes:
        text: Raw line text, unmodified.
        failure: First unmet expectation of the scan, when known.
    """

    text: str
    failure: ScanFailure | None = None


Line = Union[Empty, Comment, Metadata, Entry, Incorrect]
