"""Backing text sources that dictionary entries read their fields from.

Entries never store field text. They store ``Slice`` offsets and decode them
on demand from a text source. A source either owns its bytes
(``OwnedText``) or borrows a buffer that belongs to someone else
(``BorrowedText``); both satisfy the same ``TextSource`` protocol so the
tokenizer and the entry view are written once for either storage.
"""

from __future__ import annotations

import mmap
from typing import Protocol, Union

from cedict_lines.models import Slice

BufferOwner = Union[bytes, bytearray, mmap.mmap]

_CONTINUATION_MASK = 0xC0
_CONTINUATION_BITS = 0x80


def is_char_boundary(data: memoryview | bytes | bytearray, index: int) -> bool:
    """Return whether ``index`` is a UTF-8 character boundary within ``data``.

    Both ends of the buffer count as boundaries. Any other in-range offset is a
    boundary unless the byte there is a continuation byte (``10xxxxxx``).
    """

    size = len(data)
    if index == 0 or index == size:
        return True
    if not 0 < index < size:
        return False
    return (data[index] & _CONTINUATION_MASK) != _CONTINUATION_BITS


class TextSource(Protocol):
    """Read-only access to a UTF-8 buffer by byte range."""

    def __len__(self) -> int: ...

    def find(self, sub: bytes, start: int, end: int) -> int: ...

    def byte_at(self, index: int) -> int: ...

    def text(self, span: Slice) -> str: ...

    def is_char_boundary(self, index: int) -> bool: ...

    def check_span(self, span: Slice) -> None: ...


class _BufferText:
    """Shared read path over a buffer that supports ``find`` and the buffer protocol."""

    __slots__ = ("_data", "_view", "_released")

    def __init__(self, data: BufferOwner) -> None:
        self._data = data
        self._view = memoryview(data)
        self._released = False

    def _live_view(self) -> memoryview:
        if self._released:
            raise ValueError("Text source has been released")
        return self._view

    def __len__(self) -> int:
        return len(self._live_view())

    def find(self, sub: bytes, start: int, end: int) -> int:
        """Return the lowest index of ``sub`` within ``[start, end)`` or ``-1``."""

        self._live_view()
        return self._data.find(sub, start, end)

    def byte_at(self, index: int) -> int:
        return self._live_view()[index]

    def text(self, span: Slice) -> str:
        """Decode the bytes covered by ``span`` without an intermediate copy."""

        return str(self._live_view()[span.start : span.end], "utf-8")

    def is_char_boundary(self, index: int) -> bool:
        return is_char_boundary(self._live_view(), index)

    def check_span(self, span: Slice) -> None:
        """Validate that ``span`` fits this buffer on character boundaries.

        Raises:
            ValueError: If the span runs past the buffer or splits a character.
        """

        size = len(self)
        if span.end > size:
            raise ValueError(f"Slice ({span.start}, {span.end}) exceeds buffer of {size} bytes")
        if not (self.is_char_boundary(span.start) and self.is_char_boundary(span.end)):
            raise ValueError(
                f"Slice ({span.start}, {span.end}) does not fall on UTF-8 character boundaries"
            )


class OwnedText(_BufferText):
    """Text source that owns an immutable copy of its bytes.

    Accepts ``str`` (encoded as UTF-8) or any bytes-like value, which is copied
    into a private ``bytes`` object.
    """

    __slots__ = ()

    def __init__(self, text: str | bytes | bytearray | memoryview) -> None:
        if isinstance(text, str):
            data = text.encode("utf-8")
        else:
            data = bytes(text)
        super().__init__(data)

    @property
    def data(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"OwnedText({len(self._data)} bytes)"


class BorrowedText(_BufferText):
    """Text source over a buffer owned elsewhere.

    The borrow holds a ``memoryview`` export on the owner until ``release`` is
    called, so a ``bytearray`` owner cannot be resized and an ``mmap`` owner
    cannot be closed while entries still read from it. After ``release`` every
    read through this source, including reads from entries built on it, raises
    ``ValueError``.

    Usable as a context manager that releases on exit::

        with BorrowedText(data) as source:
            line = classify(source, 0, 42)
    """

    __slots__ = ()

    def __init__(self, owner: BufferOwner) -> None:
        super().__init__(owner)
        if self._view.format != "B" or self._view.ndim != 1:
            self._view.release()
            raise ValueError("BorrowedText requires a flat byte buffer")

    @property
    def owner(self) -> BufferOwner:
        return self._data

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """End the borrow; idempotent."""

        if not self._released:
            self._released = True
            self._view.release()

    def __enter__(self) -> BorrowedText:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else f"{len(self._view)} bytes"
        return f"BorrowedText({state})"
