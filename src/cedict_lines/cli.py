"""CLI entrypoint for checking, normalizing and exporting CC-CEDICT files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence, TextIO

from cedict_lines.io.repository import CedictRepository
from cedict_lines.io.tsv_io import write_tsv
from cedict_lines.models import Entry
from cedict_lines.parser.classifier import format_line
from cedict_lines.reporting.report_md import build_report_md
from cedict_lines.validation import collect_incorrect_lines, collect_line_counts, validate_lines

logger = logging.getLogger(__name__)


def _resolve_default_cedict_path() -> Path:
    """Resolve default CC-CEDICT path from project layout.

    Returns:
        Preferred dictionary path, favoring ``data/cedict_ts.u8`` when present
        and falling back to project-root ``cedict_ts.u8``.
    """

    cwd_data = Path("data") / "cedict_ts.u8"
    if cwd_data.exists():
        return cwd_data
    return Path("cedict_ts.u8")


def _format_integer_ranges(values: Sequence[int]) -> str:
    """Format sorted integers as compact ranges like ``3-5, 8, 10-12``.

    Args:
        values: Sorted integer list.

    Returns:
        Compact range string.
    """

    if not values:
        return ""

    ranges: list[str] = []
    start = values[0]
    prev = values[0]

    for value in values[1:]:
        if value == prev + 1:
            prev = value
            continue
        ranges.append(f"{start}-{prev}" if start != prev else str(start))
        start = value
        prev = value

    ranges.append(f"{start}-{prev}" if start != prev else str(start))
    return ", ".join(ranges)


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser with ``check``, ``dump`` and ``export`` commands.
    """

    parser = argparse.ArgumentParser(description="Parse and check CC-CEDICT dictionary files.")
    parser.add_argument(
        "--cedict",
        type=Path,
        default=_resolve_default_cedict_path(),
        help="Path to CC-CEDICT .u8 file.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Summarize line kinds and list incorrect lines.")
    check.add_argument("--report", type=Path, default=None, help="Markdown report output path.")
    check.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error when any line fails to parse.",
    )

    dump = commands.add_parser("dump", help="Rewrite the dictionary in canonical line form.")
    dump.add_argument("--output", type=Path, default=None, help="Output path (default: stdout).")
    dump.add_argument(
        "--entries-only",
        action="store_true",
        help="Write only entry lines, dropping comments, metadata and incorrect lines.",
    )

    export = commands.add_parser("export", help="Export entries to TSV.")
    export.add_argument("--output", required=True, type=Path, help="Destination TSV output path.")
    export.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    return parser


def _run_check(repo: CedictRepository, report_path: Path | None, strict: bool) -> int:
    line_counts = collect_line_counts(repo.lines)
    incorrect = collect_incorrect_lines(repo.lines)

    print(f"Checked {len(repo.lines)} lines in {repo.path}")
    print(_format_table(["kind", "count"], [[kind, str(count)] for kind, count in line_counts.items()]))

    if incorrect:
        numbers = [number for number, _ in incorrect]
        print(f"\nWARNING: Incorrect lines ({len(numbers)}): {_format_integer_ranges(numbers)}")
        for number, line in incorrect:
            print(f"  line {number}: {line.text}")
    else:
        print("\nNo incorrect lines.")

    if report_path is not None:
        report_md = build_report_md(repo.path.name, line_counts, repo.metadata, incorrect)
        report_path.write_text(report_md, encoding="utf-8")
        print(f"Wrote report to {report_path}")

    if strict:
        try:
            validate_lines(repo.lines)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
    return 0


def _write_canonical(repo: CedictRepository, handle: TextIO, entries_only: bool) -> int:
    written = 0
    for _, line in repo.lines:
        if entries_only and not isinstance(line, Entry):
            continue
        handle.write(format_line(line))
        handle.write("\n")
        written += 1
    return written


def _run_dump(repo: CedictRepository, output: Path | None, entries_only: bool) -> int:
    if output is None:
        _write_canonical(repo, sys.stdout, entries_only)
        return 0

    with output.open("w", encoding="utf-8") as handle:
        written = _write_canonical(repo, handle, entries_only)
    print(f"Wrote {written} lines to {output}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through command output.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if not args.cedict.exists():
        raise SystemExit(f"CC-CEDICT file not found: {args.cedict}")

    repo = CedictRepository(args.cedict)
    try:
        line_count = len(repo.lines)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    logger.debug(f"{args.command}: {line_count:,} lines from {args.cedict}")

    if args.command == "check":
        return _run_check(repo, args.report, args.strict)
    if args.command == "dump":
        return _run_dump(repo, args.output, args.entries_only)

    written = write_tsv(repo.entries, output_path=args.output, include_header=not args.no_header)
    print(f"Wrote {written} entries to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
