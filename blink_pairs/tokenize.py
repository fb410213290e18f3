"""Finding the bytes of interest in a text, and a multi-peek iterator."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

NEWLINE = ord("\n")
BACKSLASH = ord("\\")

T = TypeVar("T")


@dataclass(frozen=True)
class CharPos:
    """A byte of interest and its byte column within its line."""

    byte: int
    col: int


def _token_bytes(tokens: bytes | str | Iterable[int]) -> bytes:
    if isinstance(tokens, str):
        return tokens.encode("utf-8")
    return bytes(tokens)


def tokenize(text: str | bytes, tokens: bytes | str | Iterable[int]) -> Iterator[CharPos]:
    """Yield every occurrence of the given bytes, newlines and backslashes.

    Newlines are reported at column 0; every other byte carries its byte
    offset from the start of its line. NUL bytes are never reported.
    """
    wanted = {NEWLINE, BACKSLASH}
    wanted.update(b for b in _token_bytes(tokens) if b != 0)
    pattern = re.compile(
        b"[" + b"".join(re.escape(bytes([b])) for b in sorted(wanted)) + b"]"
    )
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)

    line_start = 0
    for found in pattern.finditer(data):
        index = found.start()
        byte = data[index]
        if byte == NEWLINE:
            line_start = index + 1
            yield CharPos(NEWLINE, 0)
        else:
            yield CharPos(byte, index - line_start)


class MultiPeek(Generic[T]):
    """Iterator that can peek arbitrarily far ahead.

    Each call to ``peek`` looks one element further; advancing with ``next``
    or calling ``reset_peek`` moves the peek cursor back to the front.
    """

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iterator = iter(iterable)
        self._buffer: deque[T] = deque()
        self._cursor = 0

    def __iter__(self) -> "MultiPeek[T]":
        return self

    def __next__(self) -> T:
        self._cursor = 0
        if self._buffer:
            return self._buffer.popleft()
        return next(self._iterator)

    def peek(self) -> T | None:
        """Return the next unpeeked element, or None when exhausted."""
        if self._cursor < len(self._buffer):
            item = self._buffer[self._cursor]
        else:
            try:
                item = next(self._iterator)
            except StopIteration:
                return None
            self._buffer.append(item)
        self._cursor += 1
        return item

    def reset_peek(self) -> None:
        """Move the peek cursor back to the next element."""
        self._cursor = 0