"""Unit tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest

from cedict_lines.cli import _format_integer_ranges, main

DICTIONARY = "\n".join(
    [
        "#! version=1",
        "# sample",
        "一 一 [yi1] /one/",
        "broken",
        "二 二 [er4] /two/",
        "still broken",
        "more broken",
    ]
) + "\n"


def _write(path: Path, text: str) -> Path:
    """Write helper for fixture files in tmp directories."""

    path.write_text(text, encoding="utf-8")
    return path


def test_format_integer_ranges_compacts_runs() -> None:
    assert _format_integer_ranges([4, 6, 7]) == "4, 6-7"
    assert _format_integer_ranges([]) == ""


def test_check_lists_incorrect_lines_with_numbers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cedict = _write(tmp_path / "dict.u8", DICTIONARY)
    report = tmp_path / "report.md"

    assert main(["--cedict", str(cedict), "check", "--report", str(report)]) == 0

    out = capsys.readouterr().out
    assert "Checked 7 lines" in out
    assert "Incorrect lines (3): 4, 6-7" in out
    assert "line 4: broken" in out
    assert "line 7: more broken" in out
    assert "## Incorrect lines" in report.read_text(encoding="utf-8")


def test_check_strict_fails_on_incorrect_lines(tmp_path: Path) -> None:
    cedict = _write(tmp_path / "dict.u8", DICTIONARY)

    with pytest.raises(SystemExit, match="Dictionary validation failed with 3 errors"):
        main(["--cedict", str(cedict), "check", "--strict"])


def test_check_strict_passes_on_clean_file(tmp_path: Path) -> None:
    cedict = _write(tmp_path / "dict.u8", "# ok\n一 一 [yi1] /one/\n")

    assert main(["--cedict", str(cedict), "check", "--strict"]) == 0


def test_dump_writes_canonical_lines(tmp_path: Path) -> None:
    cedict = _write(tmp_path / "dict.u8", "#!version = 1\n#  sample  \n一 一 [yi1] /one/\r\n")
    output = tmp_path / "out.u8"

    assert main(["--cedict", str(cedict), "dump", "--output", str(output)]) == 0
    assert output.read_text(encoding="utf-8") == "#! version=1\n# sample\n一 一 [yi1] /one/\n"


def test_dump_entries_only_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cedict = _write(tmp_path / "dict.u8", DICTIONARY)

    assert main(["--cedict", str(cedict), "dump", "--entries-only"]) == 0
    assert capsys.readouterr().out == "一 一 [yi1] /one/\n二 二 [er4] /two/\n"


def test_export_writes_tsv(tmp_path: Path) -> None:
    cedict = _write(tmp_path / "dict.u8", DICTIONARY)
    output = tmp_path / "out.tsv"

    assert main(["--cedict", str(cedict), "export", "--output", str(output), "--no-header"]) == 0
    assert output.read_text(encoding="utf-8") == "一\t一\tyi1\tone\n二\t二\ter4\ttwo\n"


def test_missing_dictionary_exits_with_message(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="CC-CEDICT file not found"):
        main(["--cedict", str(tmp_path / "missing.u8"), "check"])


def test_non_utf8_dictionary_exits_with_message(tmp_path: Path) -> None:
    cedict = tmp_path / "latin1.u8"
    cedict.write_bytes("é é [e2] /e/\n".encode("latin-1"))

    with pytest.raises(SystemExit, match="not valid UTF-8"):
        main(["--cedict", str(cedict), "check"])
