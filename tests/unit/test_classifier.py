"""Unit tests for line classification."""

from __future__ import annotations

import pytest

from cedict_lines.models import Comment, Empty, Entry, Incorrect, Metadata
from cedict_lines.parser.buffer import BorrowedText
from cedict_lines.parser.classifier import classify, format_line, parse_line
from cedict_lines.parser.scanner import ScanState


def test_empty_line_classifies_as_empty() -> None:
    assert parse_line("") == Empty()


def test_comment_text_is_trimmed() -> None:
    assert parse_line("# this is a comment") == Comment("this is a comment")
    assert parse_line("#") == Comment("")


def test_metadata_key_and_value_are_trimmed() -> None:
    assert parse_line("#! version = 1.0") == Metadata("version", "1.0")
    assert parse_line("#!charset=UTF-8") == Metadata("charset", "UTF-8")


def test_metadata_splits_on_first_equals_only() -> None:
    assert parse_line("#! license=cc-by-sa=4.0") == Metadata("license", "cc-by-sa=4.0")


def test_metadata_without_equals_keeps_body_as_key() -> None:
    assert parse_line("#!  publisher  ") == Metadata("publisher", "")


def test_metadata_prefix_wins_over_comment_prefix() -> None:
    assert isinstance(parse_line("#!x=y"), Metadata)
    assert isinstance(parse_line("# !x=y"), Comment)


def test_entry_line_classifies_as_entry() -> None:
    line = parse_line("愛 爱 [ai4] /to love/to be fond of/to like/")

    assert isinstance(line, Entry)
    assert line.entry.traditional == "愛"
    assert line.entry.simplified == "爱"
    assert line.entry.pinyin == "ai4"


def test_missing_pinyin_classifies_as_incorrect() -> None:
    line = parse_line("愛 爱 /to love/")

    assert isinstance(line, Incorrect)
    assert line.text == "愛 爱 /to love/"
    assert line.failure is not None
    assert line.failure.state is ScanState.EXPECT_OPEN_BRACKET


@pytest.mark.parametrize(
    "text",
    [
        "plain words",
        "   ",
        " 愛 爱 [ai4] /to love/",
        "愛 爱 [ai4]/to love/",
    ],
)
def test_malformed_lines_never_raise(text: str) -> None:
    assert isinstance(parse_line(text), Incorrect)


def test_leading_whitespace_is_not_stripped_before_classification() -> None:
    line = parse_line(" # not a comment")

    assert isinstance(line, Incorrect)


def test_classify_reads_range_of_shared_buffer() -> None:
    data = "# header\n愛 爱 [ai4] /to love/\n".encode("utf-8")
    start = data.index(b"\n") + 1
    end = data.index(b"\n", start)

    with BorrowedText(data) as source:
        comment = classify(source, 0, start - 1)
        line = classify(source, start, end)

        assert comment == Comment("header")
        assert isinstance(line, Entry)
        assert line.entry.is_borrowed
        assert line.entry.spans.line.start == start
        assert line.entry.to_text() == "愛 爱 [ai4] /to love/"


def test_classify_rejects_range_outside_buffer() -> None:
    with BorrowedText(b"abc") as source:
        with pytest.raises(ValueError):
            classify(source, 2, 10)


def test_reclassifying_entry_text_yields_entry_again() -> None:
    for text in [
        "你好 你好 [ni3 hao3] /Hello!/Hi!/How are you?/",
        "X光 X光 [X guang1] /X-ray/",
        "三 三 [san1] //",
    ]:
        line = parse_line(text)
        assert isinstance(line, Entry)
        again = parse_line(line.entry.to_text())
        assert isinstance(again, Entry)
        assert again == line


@pytest.mark.parametrize(
    "text",
    [
        "",
        "# a comment",
        "#! version=1",
        "愛 爱 [ai4] /to love/",
        "broken line",
    ],
)
def test_format_line_round_trips_canonical_lines(text: str) -> None:
    assert format_line(parse_line(text)) == text


def test_incorrect_requires_line_text() -> None:
    with pytest.raises(TypeError):
        Incorrect()

    assert Incorrect("bad").failure is None
