"""Read-only view over one tokenized CC-CEDICT entry."""

from __future__ import annotations

from typing import Iterable

from cedict_lines.models import Slice
from cedict_lines.parser.buffer import BorrowedText, OwnedText, TextSource
from cedict_lines.parser.definitions import Definitions
from cedict_lines.parser.scanner import EntrySpans, ScanFailure, scan_entry


def format_entry(traditional: str, simplified: str, pinyin: str, definitions: Iterable[str]) -> str:
    """Format entry components as one canonical CEDICT line.

    Returns:
        ``"{traditional} {simplified} [{pinyin}] /{def1}/{def2}/.../"``.
    """

    return f"{traditional} {simplified} [{pinyin}] /{'/'.join(definitions)}/"


class DictEntry:
    """Dictionary entry whose fields are byte ranges into a shared text source.

    Field text is decoded from the source on each access; the entry itself only
    keeps offsets. An entry built on a ``BorrowedText`` is readable only while
    the borrow is live; call ``to_owned`` to detach it first.

    Entries are immutable and compare by their canonical line text.
    """

    __slots__ = ("_source", "_spans")

    def __init__(self, source: TextSource, spans: EntrySpans) -> None:
        """Bind ``spans`` to ``source`` after validating them once.

        Raises:
            ValueError: If a span falls outside the buffer, outside the line or
                off a UTF-8 character boundary.
        """

        source.check_span(spans.line)
        for span in spans.fields():
            if not spans.line.contains(span):
                raise ValueError(
                    f"Field slice ({span.start}, {span.end}) lies outside line "
                    f"({spans.line.start}, {spans.line.end})"
                )
            source.check_span(span)
        self._source = source
        self._spans = spans

    @classmethod
    def from_parts(
        cls,
        traditional: str,
        simplified: str,
        pinyin: str,
        definitions: Iterable[str],
    ) -> DictEntry:
        """Build an owned entry by formatting and re-parsing its components.

        The canonical line is run back through the line classifier, so a
        constructed entry is always one the parser would read from a file.

        Raises:
            ValueError: If a component contains a line terminator, if the
                formatted line does not classify as an entry (for example a
                traditional form starting with ``#``), or if it re-parses into
                different fields (a component containing a space, a bracket or
                a ``/``).
        """

        from cedict_lines.models import Entry
        from cedict_lines.parser.classifier import classify

        definitions = tuple(definitions)
        for component in (traditional, simplified, pinyin, *definitions):
            if "\n" in component or "\r" in component:
                raise ValueError(f"Component contains a line terminator: {component!r}")
        text = format_entry(traditional, simplified, pinyin, definitions)
        line = classify(OwnedText(text))
        if not isinstance(line, Entry):
            raise ValueError(f"Components do not form a parsable CEDICT line: {text!r}")
        entry = line.entry
        parsed = (entry.traditional, entry.simplified, entry.pinyin, tuple(entry.definitions()))
        if parsed != (traditional, simplified, pinyin, definitions):
            raise ValueError(f"Components do not survive re-parsing: {text!r}")
        return entry

    @property
    def source(self) -> TextSource:
        return self._source

    @property
    def spans(self) -> EntrySpans:
        return self._spans

    @property
    def is_borrowed(self) -> bool:
        return isinstance(self._source, BorrowedText)

    @property
    def traditional(self) -> str:
        return self._source.text(self._spans.traditional)

    @property
    def simplified(self) -> str:
        return self._source.text(self._spans.simplified)

    @property
    def pinyin(self) -> str:
        """Return the bracketed pinyin as opaque text, brackets excluded."""

        return self._source.text(self._spans.pinyin)

    @property
    def definitions_blob(self) -> str:
        """Return the unsplit text after the opening ``/``, trailing ``/`` included."""

        return self._source.text(self._spans.definitions_blob)

    def definitions(self) -> Definitions:
        """Return a fresh lazy iterable over the individual definitions."""

        return Definitions(self._source, self._spans.definitions_blob)

    def to_text(self) -> str:
        """Return the canonical line text, read verbatim from the backing buffer."""

        return self._source.text(self._spans.line)

    def to_owned(self) -> DictEntry:
        """Return an equivalent entry backed by its own copy of the line."""

        if isinstance(self._source, OwnedText) and self._spans.line == Slice(0, len(self._source)):
            return self
        entry = tokenize_entry(OwnedText(self.to_text()))
        if entry is None:
            raise ValueError(f"Entry text no longer tokenizes: {self.to_text()!r}")
        return entry

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.to_text() == other.to_text()

    def __hash__(self) -> int:
        return hash(self.to_text())

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"DictEntry({self.to_text()!r})"


def tokenize_entry(source: TextSource, start: int = 0, end: int | None = None) -> DictEntry | None:
    """Tokenize the line ``[start, end)`` of ``source`` into a ``DictEntry``.

    Returns:
        The entry, borrowing ``source``, or ``None`` when the line does not
        match the entry grammar. No partial entry is ever produced.
    """

    spans = scan_entry(source, start, end)
    if isinstance(spans, ScanFailure):
        return None
    return DictEntry(source, spans)
