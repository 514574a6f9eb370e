"""Entry tokenizer: a delimiter-driven state machine over one CEDICT line.

The grammar ``<traditional> <simplified> [<pinyin>] /<definitions>`` is encoded
as a single ordered transition table. Each transition either scans forward to
a delimiter (capturing a field), expects one literal delimiter at the cursor,
or takes the rest of the line. The scan is strict and non-backtracking: the
first unmet expectation fails the whole line and no fields are returned.

Every delimiter is a single ASCII byte. ASCII bytes never occur inside a
multi-byte UTF-8 sequence, so every cut the scanner makes is a character
boundary even though it searches bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cedict_lines.models import Slice
from cedict_lines.parser.buffer import TextSource


class ScanState(Enum):
    """Named states of the entry scan."""

    SCAN_TRADITIONAL = "ScanTraditional"
    EXPECT_SPACE = "ExpectSpace"
    SCAN_SIMPLIFIED = "ScanSimplified"
    EXPECT_OPEN_BRACKET = "ExpectOpenBracket"
    SCAN_PINYIN = "ScanPinyin"
    EXPECT_CLOSE_BRACKET = "ExpectCloseBracket"
    EXPECT_SLASH = "ExpectSlash"
    SCAN_DEFINITIONS = "ScanDefinitions"


class Action(Enum):
    SCAN_UNTIL = "scan_until"
    EXPECT = "expect"
    TAKE_REST = "take_rest"


@dataclass(frozen=True)
class Transition:
    """One row of the transition table.

    Attributes:
        state: State the scanner is in while this row runs.
        action: What the row does at the cursor.
        delimiter: Byte scanned for or expected; empty for ``TAKE_REST``.
        field: Name of the ``EntrySpans`` field the row captures, if any.
    """

    state: ScanState
    action: Action
    delimiter: bytes = b""
    field: str | None = None


TRANSITIONS: tuple[Transition, ...] = (
    Transition(ScanState.SCAN_TRADITIONAL, Action.SCAN_UNTIL, b" ", "traditional"),
    Transition(ScanState.EXPECT_SPACE, Action.EXPECT, b" "),
    Transition(ScanState.SCAN_SIMPLIFIED, Action.SCAN_UNTIL, b" ", "simplified"),
    Transition(ScanState.EXPECT_SPACE, Action.EXPECT, b" "),
    Transition(ScanState.EXPECT_OPEN_BRACKET, Action.EXPECT, b"["),
    Transition(ScanState.SCAN_PINYIN, Action.SCAN_UNTIL, b"]", "pinyin"),
    Transition(ScanState.EXPECT_CLOSE_BRACKET, Action.EXPECT, b"]"),
    Transition(ScanState.EXPECT_SPACE, Action.EXPECT, b" "),
    Transition(ScanState.EXPECT_SLASH, Action.EXPECT, b"/"),
    Transition(ScanState.SCAN_DEFINITIONS, Action.TAKE_REST, b"", "definitions_blob"),
)


@dataclass(frozen=True)
class EntrySpans:
    """Field offsets of a successfully scanned line, all in buffer coordinates."""

    line: Slice
    traditional: Slice
    simplified: Slice
    pinyin: Slice
    definitions_blob: Slice

    def fields(self) -> tuple[Slice, ...]:
        return (self.traditional, self.simplified, self.pinyin, self.definitions_blob)


@dataclass(frozen=True)
class ScanFailure:
    """First unmet expectation of a failed scan.

    Attributes:
        state: State whose transition failed.
        offset: Byte offset of the cursor relative to the start of the line.
        expected: Delimiter the failing transition needed.
    """

    state: ScanState
    offset: int
    expected: bytes

    def describe(self) -> str:
        """Return a one-line human-readable explanation of the failure."""

        expected = self.expected.decode("ascii")
        if self.state in (
            ScanState.SCAN_TRADITIONAL,
            ScanState.SCAN_SIMPLIFIED,
            ScanState.SCAN_PINYIN,
        ):
            return f"{self.state.value}: no '{expected}' after byte {self.offset}"
        return f"{self.state.value}: expected '{expected}' at byte {self.offset}"


def step(
    source: TextSource, transition: Transition, cursor: int, end: int
) -> tuple[int, Slice | None] | None:
    """Run one transition at ``cursor``.

    Args:
        source: Buffer being scanned.
        transition: Table row to apply.
        cursor: Current byte offset.
        end: Exclusive byte offset where the line stops.

    Returns:
        ``(new_cursor, captured_span)`` on success, where ``captured_span`` is
        ``None`` for expectation rows, or ``None`` when the transition fails.
    """

    if transition.action is Action.EXPECT:
        if cursor >= end or source.byte_at(cursor) != transition.delimiter[0]:
            return None
        return cursor + 1, None

    if transition.action is Action.SCAN_UNTIL:
        stop = source.find(transition.delimiter, cursor, end)
        if stop == -1:
            return None
        return stop, Slice(cursor, stop)

    return end, Slice(cursor, end)


def scan_entry(source: TextSource, start: int = 0, end: int | None = None) -> EntrySpans | ScanFailure:
    """Scan the line ``[start, end)`` of ``source`` against the entry grammar.

    Args:
        source: Buffer holding the line.
        start: Byte offset where the line begins.
        end: Exclusive byte offset where the line ends; defaults to the end of
            the buffer.

    Returns:
        ``EntrySpans`` with every field located, or the ``ScanFailure`` of the
        first transition that could not be satisfied.
    """

    if end is None:
        end = len(source)

    cursor = start
    captured: dict[str, Slice] = {}
    for transition in TRANSITIONS:
        result = step(source, transition, cursor, end)
        if result is None:
            return ScanFailure(transition.state, cursor - start, transition.delimiter)
        cursor, span = result
        if transition.field is not None and span is not None:
            captured[transition.field] = span

    return EntrySpans(line=Slice(start, end), **captured)
