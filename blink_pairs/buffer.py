"""A parsed buffer that can be updated in place and queried by position."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from .parse import parse_filetype
from .tokens import Kind, Match, MatchWithLine, State, StateKind, Token

_SPAN_STATES = frozenset({StateKind.IN_INLINE_SPAN, StateKind.IN_BLOCK_SPAN})


class ParsedBuffer:
    """Matches and end-of-line parser states for every line of a buffer."""

    def __init__(self, matches_by_line: list[list[Match]], state_by_line: list[State]) -> None:
        self._matches_by_line = matches_by_line
        self._state_by_line = state_by_line

    def __len__(self) -> int:
        return len(self._matches_by_line)

    @classmethod
    def parse(cls, filetype: str, lines: Sequence[str]) -> Optional["ParsedBuffer"]:
        """Parse the whole buffer; None when the filetype is not supported."""
        result = parse_filetype(filetype, lines, State())
        if result is None:
            return None
        matches_by_line, state_by_line = result
        return cls(matches_by_line, state_by_line)

    def reparse_range(
        self,
        filetype: str,
        lines: Sequence[str],
        start_line: Optional[int] = None,
        old_end_line: Optional[int] = None,
        new_end_line: Optional[int] = None,
    ) -> bool:
        """Replace lines ``start_line`` to ``old_end_line`` with freshly parsed ones.

        ``lines`` holds the new text starting at ``start_line``; only the
        lines up to ``new_end_line`` are taken from it. Returns False when
        the filetype is not supported, leaving the buffer unchanged. Raises
        ValueError when ``new_end_line`` lies outside the parsed lines.
        """
        max_line = len(self._matches_by_line)
        start = min(start_line if start_line is not None else 0, max_line)
        old_end = min(old_end_line if old_end_line is not None else max_line, max_line)

        if start > 0 and start - 1 < len(self._state_by_line):
            initial_state = self._state_by_line[start - 1]
        else:
            initial_state = State()

        result = parse_filetype(filetype, lines, initial_state)
        if result is None:
            return False
        matches_by_line, state_by_line = result

        new_end = new_end_line if new_end_line is not None else start + len(matches_by_line)
        length = new_end - start
        if not 0 <= length <= len(matches_by_line):
            raise ValueError(
                f"new end line {new_end} is outside the {len(matches_by_line)} parsed "
                f"lines starting at {start}"
            )

        self._matches_by_line[start:old_end] = matches_by_line[:length]
        self._state_by_line[start:old_end] = state_by_line[:length]
        self._recalculate_stack_heights()
        return True

    def _line(self, line_number: int) -> Optional[list[Match]]:
        if 0 <= line_number < len(self._matches_by_line):
            return self._matches_by_line[line_number]
        return None

    def line_matches(self, line_number: int) -> Optional[list[Match]]:
        """Copies of the matches on a line, or None past the end of the buffer."""
        matches = self._line(line_number)
        if matches is None:
            return None
        return [replace(match) for match in matches]

    def span_at(self, line_number: int, col: int) -> Optional[str]:
        """Name of the inline or block span that covers the position, if any."""
        line_matches = self._line(line_number)
        line_state = self.state_at_line(line_number)
        if line_matches is None or line_state is None:
            return None

        for opening in reversed(line_matches):
            if opening.kind is not Kind.OPENING or opening.col > col:
                continue
            span = opening.token.span_name
            if span is None:
                continue
            closing = next(
                (
                    candidate
                    for candidate in line_matches
                    if candidate.kind is Kind.CLOSING
                    and candidate.col > opening.col
                    and candidate.token == opening.token
                    and candidate.stack_height == opening.stack_height
                ),
                None,
            )
            if closing is not None and closing.col < col:
                continue
            return span

        # A span that started on an earlier line
        if line_state.kind in _SPAN_STATES:
            return line_state.value
        return None

    def match_at(self, line_number: int, col: int) -> Optional[Match]:
        """Copy of the match whose text covers the column, if any."""
        matches = self._line(line_number)
        if matches is None:
            return None
        for match in matches:
            if match.col <= col < match.col + match.length():
                return replace(match)
        return None

    def match_pair(
        self, line_number: int, col: int
    ) -> Optional[tuple[MatchWithLine, MatchWithLine]]:
        """The opening and closing matches of the pair under the position."""
        found = self.match_at(line_number, col)
        if found is None:
            return None
        here = found.with_line(line_number)

        def partners(match: Match, current_line: int, after: bool) -> bool:
            if current_line == line_number:
                beyond = match.col > col if after else match.col < col
                if not beyond:
                    return False
            return match.token == here.token and match.stack_height == here.stack_height

        if here.kind is Kind.OPENING:
            for current in range(line_number, len(self._matches_by_line)):
                for match in self._matches_by_line[current]:
                    if partners(match, current, after=True):
                        return here, match.with_line(current)
            return None

        if here.kind is Kind.CLOSING:
            for current in range(line_number, -1, -1):
                for match in reversed(self._matches_by_line[current]):
                    if partners(match, current, after=False):
                        return match.with_line(current), here
            return None

        return None

    def _recalculate_stack_heights(self) -> None:
        stack: list[Token] = []
        for matches in self._matches_by_line:
            for match in matches:
                if match.kind is Kind.OPENING:
                    match.stack_height = len(stack)
                    stack.append(match.token)
                else:
                    if stack and stack[-1] == match.token:
                        stack.pop()
                    match.stack_height = len(stack)

    def state_at_line(self, line_number: int) -> Optional[State]:
        """Parser state at the end of a line, or None past the end of the buffer."""
        if 0 <= line_number < len(self._state_by_line):
            return self._state_by_line[line_number]
        return None