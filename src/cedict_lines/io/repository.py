"""File-scoped, read-only view of a whole CC-CEDICT dictionary."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
from pathlib import Path

from cedict_lines.io.reader import iter_source_lines
from cedict_lines.models import Comment, Entry, Incorrect, Line, Metadata
from cedict_lines.parser.buffer import BorrowedText
from cedict_lines.parser.entry import DictEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CedictRepository:
    """Read-only repository over one CEDICT-formatted ``.u8`` file.

    The file is read once into a single buffer owned by the repository. Every
    entry borrows that buffer instead of copying its line, so entries stay
    valid for as long as the repository instance is alive. Instances are
    path-scoped and deterministic.
    """

    path: Path

    @cached_property
    def source(self) -> BorrowedText:
        """Load the file bytes and borrow them for parsing.

        Returns:
            Text source over the whole file.

        Raises:
            FileNotFoundError: If the configured path does not exist.
            ValueError: If the file is not valid UTF-8.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"CC-CEDICT file not found: {self.path}")

        data = self.path.read_bytes()
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"CC-CEDICT file is not valid UTF-8: {self.path}: {exc}") from exc

        logger.info(f"Loaded {len(data):,} bytes from {self.path}")
        return BorrowedText(data)

    @cached_property
    def lines(self) -> tuple[tuple[int, Line], ...]:
        """Classify and cache every line of the file.

        Returns:
            Immutable tuple of ``(line_number, line)`` pairs, 1-based.
        """

        lines = tuple(iter_source_lines(self.source))
        logger.info(f"Classified {len(lines):,} lines from {self.path}")
        return lines

    @cached_property
    def entries(self) -> tuple[DictEntry, ...]:
        """Return well-formed entries in file order."""

        return tuple(line.entry for _, line in self.lines if isinstance(line, Entry))

    @cached_property
    def metadata(self) -> dict[str, str]:
        """Collect ``#!`` directives; a repeated key keeps its last value."""

        return {line.key: line.value for _, line in self.lines if isinstance(line, Metadata)}

    @cached_property
    def comments(self) -> tuple[str, ...]:
        return tuple(line.text for _, line in self.lines if isinstance(line, Comment))

    @cached_property
    def incorrect_lines(self) -> tuple[tuple[int, str], ...]:
        """Return ``(line_number, raw_text)`` for every line that failed to parse."""

        incorrect = tuple(
            (number, line.text) for number, line in self.lines if isinstance(line, Incorrect)
        )
        if incorrect:
            logger.warning(f"{len(incorrect)} incorrect line(s) in {self.path}")
        return incorrect
