import pytest

from blink_pairs.tokens import (
    Kind,
    Match,
    MatchWithLine,
    State,
    StateKind,
    Token,
    TokenKind,
    TokenType,
)

BRACE = Token(TokenKind.DELIMITER, "{", "}")
BLOCK_COMMENT = Token(TokenKind.BLOCK_COMMENT, "/*", "*/")
QUOTE = Token(TokenKind.STRING, '"')
MATH = Token(TokenKind.INLINE_SPAN, "$", "$", "math")


def test_opening_and_closing_of_pairs():
    assert BRACE.opening() == "{"
    assert BRACE.closing() == "}"
    assert BLOCK_COMMENT.opening() == "/*"
    assert BLOCK_COMMENT.closing() == "*/"


def test_string_and_line_comment_have_no_closing():
    assert QUOTE.closing() is None
    assert Token(TokenKind.LINE_COMMENT, "//", "ignored").closing() is None


def test_span_name_only_for_spans():
    assert MATH.span_name == "math"
    assert Token(TokenKind.DELIMITER, "(", ")", "x").span_name is None


def test_token_equality_and_hash():
    assert Token(TokenKind.DELIMITER, "{", "}") == BRACE
    assert {BRACE, Token(TokenKind.DELIMITER, "{", "}")} == {BRACE}
    assert Token(TokenKind.DELIMITER, "(", ")") != BRACE


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, TokenType.DELIMITER),
        (1, TokenType.STRING),
        (2, TokenType.BLOCK_STRING),
        (3, TokenType.LINE_COMMENT),
        (4, TokenType.BLOCK_COMMENT),
    ],
)
def test_token_type_from_value(value, expected):
    assert TokenType.from_value(value) is expected


@pytest.mark.parametrize("value", [5, 255, -1])
def test_token_type_from_value_rejects_unknown(value):
    with pytest.raises(ValueError):
        TokenType.from_value(value)


def test_token_type_matches():
    assert TokenType.DELIMITER.matches(BRACE)
    assert not TokenType.DELIMITER.matches(QUOTE)
    assert TokenType.STRING.matches(QUOTE)
    assert TokenType.BLOCK_COMMENT.matches(BLOCK_COMMENT)
    assert TokenType.LINE_COMMENT.matches(Match.line_comment("#", 0).token)
    assert not any(t.matches(MATH) for t in TokenType)


def test_state_defaults_to_normal():
    assert State() == State(StateKind.NORMAL)
    assert State(StateKind.IN_STRING, '"') != State(StateKind.IN_STRING, "'")


def test_line_comment_match():
    match = Match.line_comment("//", 3)
    assert match.kind is Kind.NON_PAIR
    assert match.token == Token(TokenKind.LINE_COMMENT, "//")
    assert match.col == 3
    assert match.stack_height is None
    assert match.length() == len("//")


def test_length_uses_closing_text_for_closing():
    ruby = Token(TokenKind.BLOCK_COMMENT, "=begin", "end")
    assert Match(Kind.OPENING, ruby, 0).length() == len("=begin")
    assert Match(Kind.CLOSING, ruby, 0).length() == len("end")


def test_length_of_closing_string_uses_opening():
    assert Match(Kind.CLOSING, QUOTE, 4).length() == len('"')


def test_with_line_copies_fields():
    match = Match(Kind.OPENING, BRACE, 7, 2)
    with_line = match.with_line(11)
    assert with_line == MatchWithLine(Kind.OPENING, BRACE, 11, 7, 2)


def test_match_to_dict():
    match = Match(Kind.CLOSING, BRACE, 5, 1)
    assert match.to_dict() == {
        "opening": "{",
        "closing": "}",
        "col": 5,
        "stack_height": 1,
    }


def test_match_to_dict_omits_missing_values():
    data = Match(Kind.OPENING, QUOTE, 2).to_dict()
    assert data == {"opening": '"', "col": 2}


def test_span_match_with_line_to_dict():
    data = Match(Kind.OPENING, MATH, 0).with_line(3).to_dict()
    assert data == {
        "opening": "$",
        "closing": "$",
        "span": "math",
        "line": 3,
        "col": 0,
    }