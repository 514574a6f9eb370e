"""CC-CEDICT line classifier and zero-copy entry tokenizer."""

from .models import Comment, Empty, Entry, Incorrect, Line, Metadata, Slice
from .parser.buffer import BorrowedText, OwnedText, TextSource
from .parser.classifier import classify, format_line, parse_line
from .parser.entry import DictEntry, format_entry, tokenize_entry

__all__ = [
    "Slice",
    "Line",
    "Empty",
    "Comment",
    "Metadata",
    "Entry",
    "Incorrect",
    "TextSource",
    "OwnedText",
    "BorrowedText",
    "DictEntry",
    "classify",
    "parse_line",
    "format_line",
    "format_entry",
    "tokenize_entry",
]
