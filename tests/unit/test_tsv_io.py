"""Unit tests for TSV serialization helpers."""

from __future__ import annotations

from pathlib import Path

from cedict_lines.io.tsv_io import TSV_HEADER, write_tsv
from cedict_lines.parser.entry import DictEntry


def test_write_tsv_joins_definitions_with_slashes(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"
    entries = [
        DictEntry.from_parts("愛", "爱", "ai4", ["to love", "to be fond of"]),
        DictEntry.from_parts("三", "三", "san1", []),
    ]

    written = write_tsv(entries, output_path=output, include_header=True)
    lines = output.read_text(encoding="utf-8").splitlines()

    assert written == 2
    assert TSV_HEADER == ["traditional", "simplified", "pinyin", "definitions"]
    assert lines[0].split("\t") == TSV_HEADER
    assert lines[1].split("\t") == ["愛", "爱", "ai4", "to love/to be fond of"]
    assert lines[2].split("\t") == ["三", "三", "san1", ""]


def test_write_tsv_without_header(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"

    write_tsv([DictEntry.from_parts("一", "一", "yi1", ["one"])], output_path=output, include_header=False)

    assert output.read_text(encoding="utf-8") == "一\t一\tyi1\tone\n"


def test_write_tsv_keeps_four_columns_when_fields_contain_tabs(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"
    entry = DictEntry.from_parts("一", "一", "yi1\tyi1", ["one\tsingle", "unit"])

    write_tsv([entry], output_path=output, include_header=False)

    assert output.read_text(encoding="utf-8").rstrip("\n").split("\t") == [
        "一",
        "一",
        "yi1 yi1",
        "one single/unit",
    ]
