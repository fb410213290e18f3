"""Running a language matcher over the lines of a buffer."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Sequence

from .languages import get_language
from .matcher import Matcher, build_matcher
from .tokenize import BACKSLASH, NEWLINE, MultiPeek, tokenize
from .tokens import Match, State, StateKind

ParseResult = tuple[list[list[Match]], list[State]]

# States that cannot continue past the end of their line.
_LINE_BOUND = frozenset(
    {StateKind.IN_STRING, StateKind.IN_LINE_COMMENT, StateKind.IN_INLINE_SPAN}
)


def parse(lines: Sequence[str], initial_state: State, matcher: Matcher) -> ParseResult:
    """Scan the lines, returning the matches of each line and its end state."""
    matches_by_line: list[list[Match]] = []
    state_by_line: list[State] = []
    line_matches: list[Match] = []
    state = initial_state
    stack: list[int] = []
    escaped_col: Optional[int] = None

    tokens = MultiPeek(tokenize("\n".join(lines), matcher.tokens()))
    for token in tokens:
        if token.byte == NEWLINE:
            matches_by_line.append(line_matches)
            line_matches = []
            escaped_col = None
            if state.kind in _LINE_BOUND:
                state = State()
            state_by_line.append(state)
            continue

        follows_backslash = escaped_col is not None and escaped_col == token.col - 1

        if token.byte == BACKSLASH:
            escaped_col = None if follows_backslash else token.col
            continue

        state = matcher.call(line_matches, stack, tokens, state, token, follows_backslash)

    matches_by_line.append(line_matches)
    state_by_line.append(state)
    return matches_by_line, state_by_line


@lru_cache(maxsize=None)
def _matcher_for(filetype: str) -> Optional[Matcher]:
    definition = get_language(filetype)
    return None if definition is None else build_matcher(definition)


def parse_filetype(
    filetype: str, lines: Sequence[str], initial_state: State = State()
) -> Optional[ParseResult]:
    """Parse the lines with the built-in language for the filetype.

    Returns None when the filetype is not supported.
    """
    matcher = _matcher_for(filetype)
    if matcher is None:
        return None
    return parse(lines, initial_state, matcher)