"""Validation and counting helpers over classified dictionary lines."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from cedict_lines.models import Comment, Empty, Entry, Incorrect, Line, Metadata

LINE_KINDS = ("empty", "comment", "metadata", "entry", "incorrect")

_KIND_BY_TYPE = {
    Empty: "empty",
    Comment: "comment",
    Metadata: "metadata",
    Entry: "entry",
    Incorrect: "incorrect",
}


def line_kind(line: Line) -> str:
    """Return the lowercase kind label of a classified line."""

    return _KIND_BY_TYPE[type(line)]


def collect_line_counts(lines: Iterable[tuple[int, Line]]) -> dict[str, int]:
    """Count numbered lines by kind.

    Args:
        lines: ``(line_number, line)`` pairs.

    Returns:
        Dictionary with every kind in ``LINE_KINDS`` order, zero counts included.
    """

    counter: Counter[str] = Counter()
    for _, line in lines:
        counter[line_kind(line)] += 1
    return {kind: counter[kind] for kind in LINE_KINDS}


def collect_incorrect_lines(lines: Iterable[tuple[int, Line]]) -> list[tuple[int, Incorrect]]:
    """Return the incorrect lines with their 1-based line numbers."""

    return [(number, line) for number, line in lines if isinstance(line, Incorrect)]


def validate_lines(lines: Iterable[tuple[int, Line]]) -> None:
    """Require every line of a dictionary to classify as something other than incorrect.

    Args:
        lines: ``(line_number, line)`` pairs.

    Raises:
        ValueError: If any line is incorrect; the message lists each one with
            its line number, the failing scan state and its raw text.
    """

    errors: list[str] = []
    for number, line in collect_incorrect_lines(lines):
        reason = line.failure.describe() if line.failure is not None else "unparsable"
        errors.append(f"Line {number}: {reason} in {line.text!r}")

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Dictionary validation failed with {len(errors)} errors:\n{preview}{more}")
