"""Tokens, parser states and matches produced while scanning a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class Kind(Enum):
    """Role of a match within its pair."""

    OPENING = 0
    CLOSING = 1
    NON_PAIR = 2


class TokenKind(Enum):
    """The family a token belongs to."""

    DELIMITER = "delimiter"
    STRING = "string"
    BLOCK_STRING = "block_string"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    INLINE_SPAN = "inline_span"
    BLOCK_SPAN = "block_span"


_UNCLOSED_KINDS = frozenset({TokenKind.STRING, TokenKind.LINE_COMMENT})
_SPAN_KINDS = frozenset({TokenKind.INLINE_SPAN, TokenKind.BLOCK_SPAN})


@dataclass(frozen=True)
class Token:
    """A recognised pattern: its opening text, closing text and span name."""

    kind: TokenKind
    open_text: str
    close_text: str | None = None
    span: str | None = None

    def opening(self) -> str:
        """Text that opens this token."""
        return self.open_text

    def closing(self) -> str | None:
        """Text that closes this token, or None for strings and line comments."""
        if self.kind in _UNCLOSED_KINDS:
            return None
        return self.close_text

    @property
    def span_name(self) -> str | None:
        """Name of the span for inline and block spans, otherwise None."""
        return self.span if self.kind in _SPAN_KINDS else None


class TokenType(IntEnum):
    """Numeric filter for selecting matches of one token family."""

    DELIMITER = 0
    STRING = 1
    BLOCK_STRING = 2
    LINE_COMMENT = 3
    BLOCK_COMMENT = 4

    def matches(self, token: Token) -> bool:
        """Whether the token belongs to this family."""
        return _TOKEN_TYPE_KINDS[self] is token.kind

    @classmethod
    def from_value(cls, value: int) -> "TokenType":
        """Look up a token type by its number; raises ValueError if unknown."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown token type: {value!r}") from None


_TOKEN_TYPE_KINDS = {
    TokenType.DELIMITER: TokenKind.DELIMITER,
    TokenType.STRING: TokenKind.STRING,
    TokenType.BLOCK_STRING: TokenKind.BLOCK_STRING,
    TokenType.LINE_COMMENT: TokenKind.LINE_COMMENT,
    TokenType.BLOCK_COMMENT: TokenKind.BLOCK_COMMENT,
}


class StateKind(Enum):
    """What construct the parser is inside of."""

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_BLOCK_STRING = "in_block_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"
    IN_INLINE_SPAN = "in_inline_span"
    IN_BLOCK_SPAN = "in_block_span"


@dataclass(frozen=True)
class State:
    """Parser state; ``value`` holds the opening text or span name, if any."""

    kind: StateKind = StateKind.NORMAL
    value: str | None = None


def _token_fields(token: Token) -> dict[str, Any]:
    fields: dict[str, Any] = {"opening": token.opening()}
    closing = token.closing()
    if closing is not None:
        fields["closing"] = closing
    if token.span_name is not None:
        fields["span"] = token.span_name
    return fields


@dataclass
class Match:
    """A token found at a column of a line."""

    kind: Kind
    token: Token
    col: int
    stack_height: int | None = None

    def with_line(self, line: int) -> "MatchWithLine":
        """Copy of this match that also records its line number."""
        return MatchWithLine(
            kind=self.kind,
            token=self.token,
            line=line,
            col=self.col,
            stack_height=self.stack_height,
        )

    @classmethod
    def line_comment(cls, text: str, col: int) -> "Match":
        """A line comment marker, which has no partner."""
        return cls(Kind.NON_PAIR, Token(TokenKind.LINE_COMMENT, text), col)

    def length(self) -> int:
        """Length in bytes of the text this match covers."""
        if self.kind is Kind.CLOSING:
            text = self.token.closing() or self.token.opening()
        else:
            text = self.token.opening()
        return len(text.encode("utf-8"))

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the match, leaving out absent values."""
        fields = _token_fields(self.token)
        fields["col"] = self.col
        if self.stack_height is not None:
            fields["stack_height"] = self.stack_height
        return fields


@dataclass
class MatchWithLine:
    """A match together with the line it was found on."""

    kind: Kind
    token: Token
    line: int
    col: int
    stack_height: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the match, leaving out absent values."""
        fields = _token_fields(self.token)
        fields["line"] = self.line
        fields["col"] = self.col
        if self.stack_height is not None:
            fields["stack_height"] = self.stack_height
        return fields