"""Registry of parsed buffers keyed by buffer number, with module-level helpers."""

from __future__ import annotations

import threading
from typing import Optional, Sequence

from .buffer import ParsedBuffer
from .tokens import Match, MatchWithLine, TokenType


class BufferRegistry:
    """Thread-safe collection of parsed buffers."""

    def __init__(self) -> None:
        self._buffers: dict[int, ParsedBuffer] = {}
        self._lock = threading.Lock()

    def parse_buffer(
        self,
        bufnr: int,
        filetype: str,
        lines: Sequence[str],
        start_line: Optional[int] = None,
        old_end_line: Optional[int] = None,
        new_end_line: Optional[int] = None,
    ) -> bool:
        """Parse a buffer, incrementally if it was parsed before.

        Returns False when the filetype is not supported.
        """
        with self._lock:
            existing = self._buffers.get(bufnr)
            if existing is not None:
                return existing.reparse_range(
                    filetype, lines, start_line, old_end_line, new_end_line
                )
            parsed = ParsedBuffer.parse(filetype, lines)
            if parsed is None:
                return False
            self._buffers[bufnr] = parsed
            return True

    def get_line_matches(
        self, bufnr: int, line_number: int, token_type: Optional[int] = None
    ) -> list[Match]:
        """Matches of one token family on a line; delimiters by default.

        An unknown token type number falls back to delimiters.
        """
        selected = TokenType.DELIMITER
        if token_type is not None:
            try:
                selected = TokenType.from_value(token_type)
            except ValueError:
                selected = TokenType.DELIMITER
        with self._lock:
            parsed = self._buffers.get(bufnr)
            matches = parsed.line_matches(line_number) if parsed is not None else None
        if matches is None:
            return []
        return [match for match in matches if selected.matches(match.token)]

    def get_span_at(self, bufnr: int, row: int, col: int) -> Optional[str]:
        """Name of the span covering the position, if any."""
        with self._lock:
            parsed = self._buffers.get(bufnr)
            return parsed.span_at(row, col) if parsed is not None else None

    def get_match_at(self, bufnr: int, row: int, col: int) -> Optional[Match]:
        """The match covering the position, if any."""
        with self._lock:
            parsed = self._buffers.get(bufnr)
            return parsed.match_at(row, col) if parsed is not None else None

    def get_match_pair(
        self, bufnr: int, row: int, col: int
    ) -> Optional[tuple[MatchWithLine, MatchWithLine]]:
        """Opening and closing matches of the pair under the position, if any."""
        with self._lock:
            parsed = self._buffers.get(bufnr)
            return parsed.match_pair(row, col) if parsed is not None else None


_registry = BufferRegistry()


def parse_buffer(
    bufnr: int,
    filetype: str,
    lines: Sequence[str],
    start_line: Optional[int] = None,
    old_end_line: Optional[int] = None,
    new_end_line: Optional[int] = None,
) -> bool:
    """Parse a buffer in the shared registry."""
    return _registry.parse_buffer(bufnr, filetype, lines, start_line, old_end_line, new_end_line)


def get_line_matches(
    bufnr: int, line_number: int, token_type: Optional[int] = None
) -> list[Match]:
    """Matches on a line of a buffer in the shared registry."""
    return _registry.get_line_matches(bufnr, line_number, token_type)


def get_span_at(bufnr: int, row: int, col: int) -> Optional[str]:
    """Span at a position of a buffer in the shared registry."""
    return _registry.get_span_at(bufnr, row, col)


def get_match_at(bufnr: int, row: int, col: int) -> Optional[Match]:
    """Match at a position of a buffer in the shared registry."""
    return _registry.get_match_at(bufnr, row, col)


def get_match_pair(
    bufnr: int, row: int, col: int
) -> Optional[tuple[MatchWithLine, MatchWithLine]]:
    """Pair at a position of a buffer in the shared registry."""
    return _registry.get_match_pair(bufnr, row, col)