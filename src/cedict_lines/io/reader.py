"""Line iteration over text streams and whole in-memory dictionary buffers."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from cedict_lines.models import Entry, Incorrect, Line
from cedict_lines.parser.buffer import TextSource
from cedict_lines.parser.classifier import classify, parse_line
from cedict_lines.parser.entry import DictEntry

logger = logging.getLogger(__name__)

NEWLINE = b"\n"
CARRIAGE_RETURN = 0x0D


def _log_incorrect(number: int, line: Line) -> Line:
    if isinstance(line, Incorrect) and logger.isEnabledFor(logging.DEBUG):
        reason = line.failure.describe() if line.failure is not None else "unparsable"
        logger.debug(f"Line {number}: {reason}: {line.text!r}")
    return line


def iter_lines(handle: Iterable[str]) -> Iterator[tuple[int, Line]]:
    """Classify each line of a text stream.

    Args:
        handle: Any iterable of text lines, such as an open text file. Trailing
            ``\\r``/``\\n`` terminators are removed before classification.

    Yields:
        ``(line_number, line)`` pairs with 1-based line numbers. Each entry
        owns a copy of its own line.
    """

    for number, raw in enumerate(handle, start=1):
        yield number, _log_incorrect(number, parse_line(raw.rstrip("\r\n")))


def iter_source_lines(source: TextSource) -> Iterator[tuple[int, Line]]:
    """Classify every line of a whole buffer in place.

    Lines are split on ``\\n`` with trailing ``\\r`` bytes dropped. Entries
    borrow ``source`` rather than copying their line, so they are valid only
    while ``source`` is.

    Yields:
        ``(line_number, line)`` pairs with 1-based line numbers. A final
        terminator does not start an extra empty line.
    """

    size = len(source)
    start = 0
    number = 0
    while start < size:
        number += 1
        newline = source.find(NEWLINE, start, size)
        stop = size if newline == -1 else newline
        next_start = stop + 1
        while stop > start and source.byte_at(stop - 1) == CARRIAGE_RETURN:
            stop -= 1
        yield number, _log_incorrect(number, classify(source, start, stop))
        start = next_start


def parse_entries(handle: Iterable[str]) -> Iterator[DictEntry]:
    """Yield only the well-formed entries of a text stream, skipping everything else."""

    for _, line in iter_lines(handle):
        if isinstance(line, Entry):
            yield line.entry
