import pytest

from blink_pairs.definition import LanguageDef, calculate_max_lookahead, collect_tokens
from blink_pairs.languages import C, MARKDOWN, filetypes, get_language
from blink_pairs.matcher import Rule, build_matcher
from blink_pairs.tokenize import MultiPeek, tokenize
from blink_pairs.tokens import Kind, Match, State, StateKind, Token, TokenKind

BLOCK_COMMENT = Token(TokenKind.BLOCK_COMMENT, "/*", "*/")
BRACES = Token(TokenKind.DELIMITER, "{", "}")
QUOTE = Token(TokenKind.STRING, "'")


def _stream(matcher, text):
    return MultiPeek(tokenize(text, matcher.tokens()))


def _rule_for(matcher, pattern, state):
    return next(r for r in matcher.rules if r.pattern == pattern and r.input_state == state)


@pytest.mark.parametrize("filetype", filetypes())
def test_tokens_and_lookahead_follow_definition(filetype):
    definition = get_language(filetype)
    matcher = build_matcher(definition)
    assert matcher.tokens() == collect_tokens(definition)
    assert matcher.max_lookahead == calculate_max_lookahead(definition)


def test_rule_order_for_c():
    patterns = [rule.pattern for rule in build_matcher(C).rules]
    assert patterns == [
        b"/*", b"*/", b"//", b'"', b'"', b"'", b"'",
        b"(", b")", b"[", b"]", b"{", b"}",
    ]


def test_multi_byte_rules_are_adjacent():
    matcher = build_matcher(C)
    comment = _rule_for(matcher, b"//", State())
    token = next(iter(tokenize("//", matcher.tokens())))
    assert comment.adjacent
    assert comment.applies(State(), token, [(ord("/"), 1), (0, None)], False)
    assert not comment.applies(State(), token, [(ord("/"), 2), (0, None)], False)


def test_rule_requires_its_state():
    matcher = build_matcher(C)
    close = _rule_for(matcher, b"*/", State(StateKind.IN_BLOCK_COMMENT, "/*"))
    token = next(iter(tokenize("*/", matcher.tokens())))
    lookahead = [(ord("/"), 1), (0, None)]
    assert close.applies(State(StateKind.IN_BLOCK_COMMENT, "/*"), token, lookahead, False)
    assert not close.applies(State(), token, lookahead, False)


def test_string_close_ignores_escaped_quote():
    matcher = build_matcher(C)
    inside = State(StateKind.IN_STRING, '"')
    close = _rule_for(matcher, b'"', inside)
    token = next(iter(tokenize('"', matcher.tokens())))
    assert close.ignore_escaped
    assert close.applies(inside, token, [(0, None), (0, None)], False)
    assert not close.applies(inside, token, [(0, None), (0, None)], True)


def test_custom_rule_with_short_lookahead_does_not_apply():
    rule = Rule(pattern=b"ab", action=lambda step: State(), adjacent=True)
    token = next(iter(tokenize("ab", b"ab")))
    assert not rule.applies(State(), token, [], False)


def test_call_opens_block_comment_and_skips_pattern():
    matcher = build_matcher(C)
    text = "/* x */"
    tokens = _stream(matcher, text)
    matches, stack = [], []
    state = matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert state == State(StateKind.IN_BLOCK_COMMENT, "/*")
    assert matches == [Match(Kind.OPENING, BLOCK_COMMENT, 0)]
    assert next(tokens).col == text.index("*/")


def test_call_without_matching_rule_keeps_state():
    matcher = build_matcher(C)
    tokens = _stream(matcher, "{")
    matches, stack = [], []
    inside = State(StateKind.IN_BLOCK_COMMENT, "/*")
    assert matcher.call(matches, stack, tokens, inside, next(tokens), False) == inside
    assert matches == []
    assert stack == []


def test_call_tracks_delimiter_stack():
    matcher = build_matcher(C)
    text = "{}"
    tokens = _stream(matcher, text)
    matches, stack = [], []
    matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert stack == [ord("}")]
    matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert stack == []
    assert matches == [
        Match(Kind.OPENING, BRACES, 0, 0),
        Match(Kind.CLOSING, BRACES, text.index("}"), 0),
    ]


def test_call_matches_character_literal():
    matcher = build_matcher(C)
    text = "'{'"
    tokens = _stream(matcher, text)
    matches, stack = [], []
    state = matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert state == State()
    assert matches == [
        Match(Kind.OPENING, QUOTE, 0),
        Match(Kind.CLOSING, QUOTE, text.rindex("'")),
    ]
    assert next(tokens, None) is None


def test_lookahead_stops_at_newline():
    matcher = build_matcher(C)
    tokens = _stream(matcher, "'\n'")
    matches, stack = [], []
    state = matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert state == State()
    assert matches == []
    assert next(tokens).byte == ord("\n")


def test_markdown_bold_span():
    matcher = build_matcher(MARKDOWN)
    tokens = _stream(matcher, "**")
    matches, stack = [], []
    state = matcher.call(matches, stack, tokens, State(), next(tokens), False)
    assert state == State(StateKind.IN_INLINE_SPAN, "bold")
    assert [m.token.span_name for m in matches] == ["bold"]
    assert matches[0].token.opening() == "**"


def test_built_matcher_name_comes_from_definition():
    definition = LanguageDef("Tiny", delimiters=(("<", ">"),))
    matcher = build_matcher(definition)
    assert matcher.name == "Tiny"
    assert [rule.pattern for rule in matcher.rules] == [b"<", b">"]