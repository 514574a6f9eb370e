"""Lazy splitting of a definitions blob into individual definitions."""

from __future__ import annotations

from typing import Iterator

from cedict_lines.models import Slice
from cedict_lines.parser.buffer import TextSource

SEPARATOR = b"/"
_SEPARATOR_BYTE = SEPARATOR[0]
_TRAILING_WHITESPACE = frozenset(b" \t\r\n\f\v")


def trim_blob(source: TextSource, blob: Slice) -> Slice:
    """Drop exactly one leading and one trailing ``/`` from ``blob`` when present.

    ASCII whitespace that follows the final ``/`` is ignored, so a line with
    trailing spaces does not gain a blank last definition.
    """

    start, end = blob.start, blob.end
    if start < end and source.byte_at(start) == _SEPARATOR_BYTE:
        start += 1
    tail = end
    while tail > start and source.byte_at(tail - 1) in _TRAILING_WHITESPACE:
        tail -= 1
    if start < tail and source.byte_at(tail - 1) == _SEPARATOR_BYTE:
        end = tail - 1
    return Slice(start, end)


def iter_definition_spans(source: TextSource, blob: Slice) -> Iterator[Slice]:
    """Yield the span of each ``/``-separated definition inside ``blob``.

    An empty blob after trimming yields nothing, so ``"/"`` has no definitions
    rather than one empty one. Empty definitions between two interior
    separators are kept.
    """

    body = trim_blob(source, blob)
    if body.is_empty:
        return

    cursor = body.start
    while True:
        cut = source.find(SEPARATOR, cursor, body.end)
        if cut == -1:
            yield Slice(cursor, body.end)
            return
        yield Slice(cursor, cut)
        cursor = cut + 1


class Definitions:
    """Restartable iterable over the definitions of one entry.

    Every ``iter()`` scans the blob from the beginning; nothing is cached and
    the entry is never modified.
    """

    __slots__ = ("_source", "_blob")

    def __init__(self, source: TextSource, blob: Slice) -> None:
        self._source = source
        self._blob = blob

    def __iter__(self) -> Iterator[str]:
        for span in iter_definition_spans(self._source, self._blob):
            yield self._source.text(span)

    def spans(self) -> Iterator[Slice]:
        return iter_definition_spans(self._source, self._blob)

    def __repr__(self) -> str:
        return f"Definitions({list(self)!r})"
