"""Markdown report generation for dictionary check runs."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from cedict_lines.models import Incorrect


def _escape_cell(value: str) -> str:
    """Escape characters that would break a markdown table cell."""

    return value.replace("\\", "\\\\").replace("|", "\\|")


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_escape_cell(cell) for cell in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def build_report_md(
    source_label: str,
    line_counts: Mapping[str, int],
    metadata: Mapping[str, str],
    incorrect: Sequence[tuple[int, Incorrect]],
) -> str:
    """Build the markdown check report for one dictionary file.

    Args:
        source_label: Name of the checked file, used in the title.
        line_counts: Line kind to count, in display order.
        metadata: ``#!`` directives found in the file.
        incorrect: ``(line_number, line)`` pairs for lines that failed to parse.

    Returns:
        Full markdown content with summary tables.
    """

    count_rows = [(kind, str(count)) for kind, count in line_counts.items()]
    metadata_rows = [(key, metadata[key]) for key in sorted(metadata)]
    incorrect_rows = [
        (
            str(number),
            line.failure.describe() if line.failure is not None else "",
            f"`{line.text}`" if "`" not in line.text else line.text,
        )
        for number, line in sorted(incorrect, key=lambda item: item[0])
    ]

    sections = [
        f"# CC-CEDICT Check Report: {source_label}",
        "",
        "## Line kinds",
        _markdown_table(["kind", "count"], count_rows),
        "",
        "## Metadata",
        _markdown_table(["key", "value"], metadata_rows),
        "",
        "## Incorrect lines",
        _markdown_table(["line", "reason", "text"], incorrect_rows),
    ]

    return "\n".join(sections) + "\n"
