"""TSV export helpers for parsed dictionary entries."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from cedict_lines.parser.entry import DictEntry

TSV_HEADER = [
    "traditional",
    "simplified",
    "pinyin",
    "definitions",
]


def _cell(value: str) -> str:
    return value.replace("\t", " ")


def write_tsv(entries: Iterable[DictEntry], output_path: Path, include_header: bool = True) -> int:
    """Write entries to a TSV file using the canonical column order.

    Definitions are joined with ``/``, which cannot occur inside a single
    definition. Tabs inside a field are written as spaces so every row keeps
    exactly four columns.

    Args:
        entries: Entries to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.

    Returns:
        Number of entry rows written.
    """

    count = 0
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(TSV_HEADER))
            handle.write("\n")
        for entry in entries:
            handle.write(
                "\t".join(
                    _cell(value)
                    for value in (
                        entry.traditional,
                        entry.simplified,
                        entry.pinyin,
                        "/".join(entry.definitions()),
                    )
                )
            )
            handle.write("\n")
            count += 1
    return count
