"""Line classifier for CC-CEDICT files.

Each raw line is exactly one of: empty, ``#!`` metadata directive, ``#``
comment, well-formed entry, or incorrect. Classification is a pure function of
the line bytes and never raises for malformed content.
"""

from __future__ import annotations

from cedict_lines.models import Comment, Empty, Entry, Incorrect, Line, Metadata, Slice
from cedict_lines.parser.buffer import OwnedText, TextSource
from cedict_lines.parser.entry import DictEntry
from cedict_lines.parser.scanner import ScanFailure, scan_entry

METADATA_PREFIX = b"#!"
COMMENT_PREFIX = b"#"


def _starts_with(source: TextSource, prefix: bytes, start: int, end: int) -> bool:
    stop = start + len(prefix)
    return stop <= end and source.find(prefix, start, stop) == start


def parse_metadata(body: str) -> Metadata:
    """Split a directive body on its first ``=`` into a trimmed key and value.

    A body without ``=`` becomes a key with an empty value.
    """

    key, _, value = body.strip().partition("=")
    return Metadata(key.strip(), value.strip())


def classify(source: TextSource, start: int = 0, end: int | None = None) -> Line:
    """Classify the line ``[start, end)`` of ``source``.

    Entry lines borrow ``source``: their fields are offsets into it. Comment,
    metadata and incorrect lines carry decoded text.

    Args:
        source: Buffer holding the line, without its line terminator.
        start: Byte offset where the line begins.
        end: Exclusive byte offset where the line ends; defaults to the end of
            the buffer.

    Returns:
        Exactly one ``Line`` variant.

    Raises:
        ValueError: If ``[start, end)`` is not a valid range of ``source``.
    """

    if end is None:
        end = len(source)
    line = Slice(start, end)
    source.check_span(line)

    if line.is_empty:
        return Empty()
    if _starts_with(source, METADATA_PREFIX, start, end):
        return parse_metadata(source.text(Slice(start + len(METADATA_PREFIX), end)))
    if _starts_with(source, COMMENT_PREFIX, start, end):
        return Comment(source.text(Slice(start + len(COMMENT_PREFIX), end)).strip())

    spans = scan_entry(source, start, end)
    if isinstance(spans, ScanFailure):
        return Incorrect(source.text(line), spans)
    return Entry(DictEntry(source, spans))


def parse_line(text: str) -> Line:
    """Classify one line of text held in its own buffer."""

    return classify(OwnedText(text))


def format_line(line: Line) -> str:
    """Reconstruct the canonical text of any classified line.

    Entries return their backing text verbatim and incorrect lines return
    their raw text, so a file of valid lines round-trips through
    ``parse_line``/``format_line`` unchanged apart from comment and directive
    whitespace.
    """

    if isinstance(line, Entry):
        return line.entry.to_text()
    if isinstance(line, Metadata):
        return f"#! {line.key}={line.value}"
    if isinstance(line, Comment):
        return f"# {line.text}" if line.text else "#"
    if isinstance(line, Incorrect):
        return line.text
    return ""
