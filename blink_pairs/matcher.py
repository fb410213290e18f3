"""Rule tables that recognise a language's patterns in a token stream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .definition import LanguageDef, calculate_max_lookahead, collect_tokens
from .tokenize import NEWLINE, CharPos, MultiPeek
from .tokens import Kind, Match, State, StateKind, Token, TokenKind

NORMAL = State()

# Each lookahead entry is (byte, distance from the current token). Missing
# entries, and every entry from a newline onwards, are (0, None).
Peek = Tuple[int, Optional[int]]
Lookahead = Sequence[Peek]

_MISSING: Peek = (0, None)


@dataclass
class _Step:
    """Everything an action needs to record matches and advance the stream."""

    matches: list[Match]
    stack: list[int]
    tokens: MultiPeek[CharPos]
    token: CharPos
    lookahead: Lookahead

    def distance(self, index: int) -> int:
        distance = self.lookahead[index - 1][1]
        if distance is None:
            raise ValueError(f"no lookahead token at position {index}")
        return distance

    def skip(self, count: int) -> None:
        for _ in range(count):
            next(self.tokens, None)


Action = Callable[[_Step], State]
Condition = Callable[[Lookahead], bool]


@dataclass(frozen=True)
class Rule:
    """One pattern to recognise, the state it applies in and what it does.

    ``adjacent`` requires every byte of the pattern to follow directly on
    the previous one; ``ignore_escaped`` keeps the rule from firing on a
    token preceded by a backslash.
    """

    pattern: bytes
    action: Action
    input_state: State = NORMAL
    adjacent: bool = False
    ignore_escaped: bool = False
    condition: Optional[Condition] = None

    def applies(
        self, state: State, token: CharPos, lookahead: Lookahead, escaped: bool
    ) -> bool:
        """Whether this rule fires for the token in the given state."""
        if state != self.input_state or token.byte != self.pattern[0]:
            return False
        if self.ignore_escaped and escaped:
            return False
        rest = self.pattern[1:]
        ahead = list(lookahead[: len(rest)])
        if len(ahead) < len(rest):
            return False
        if any(byte != expected for (byte, _), expected in zip(ahead, rest)):
            return False
        if self.adjacent and any(
            distance != offset for offset, (_, distance) in enumerate(ahead, start=1)
        ):
            return False
        if self.condition is not None and not self.condition(lookahead):
            return False
        return True


@dataclass(frozen=True)
class Matcher:
    """Ordered rules for one language; the first rule that applies wins."""

    name: str
    token_bytes: bytes
    max_lookahead: int
    rules: tuple[Rule, ...]

    def tokens(self) -> bytes:
        """Bytes the tokenizer has to report for this language."""
        return self.token_bytes

    def call(
        self,
        matches: list[Match],
        stack: list[int],
        tokens: MultiPeek[CharPos],
        state: State,
        token: CharPos,
        escaped: bool,
    ) -> State:
        """Handle one token, appending matches, and return the next state."""
        lookahead = self._peek_ahead(tokens, token)
        for rule in self.rules:
            if rule.applies(state, token, lookahead, escaped):
                return rule.action(_Step(matches, stack, tokens, token, lookahead))
        return state

    def _peek_ahead(self, tokens: MultiPeek[CharPos], token: CharPos) -> tuple[Peek, ...]:
        tokens.reset_peek()
        found_newline = False
        ahead: list[Peek] = []
        for _ in range(self.max_lookahead):
            peeked = tokens.peek()
            if peeked is not None and peeked.byte == NEWLINE:
                found_newline = True
            if peeked is None or found_newline:
                ahead.append(_MISSING)
            else:
                ahead.append((peeked.byte, peeked.col - token.col))
        return tuple(ahead)


def _rule(
    pattern: str,
    action: Action,
    *,
    input_state: State = NORMAL,
    ignore_escaped: bool = False,
    condition: Optional[Condition] = None,
    adjacent: Optional[bool] = None,
) -> Rule:
    data = pattern.encode("utf-8")
    return Rule(
        pattern=data,
        action=action,
        input_state=input_state,
        adjacent=len(data) > 1 if adjacent is None else adjacent,
        ignore_escaped=ignore_escaped,
        condition=condition,
    )


def _emit(kind: Kind, token: Token, text: str, next_state: State) -> Action:
    """Record one match and skip the remaining bytes of a multi-byte pattern."""
    extra = len(text.encode("utf-8")) - 1

    def action(step: _Step) -> State:
        step.matches.append(Match(kind, token, step.token.col))
        step.skip(extra)
        return next_state

    return action


def _paired(
    token_kind: TokenKind,
    state_kind: StateKind,
    open_text: str,
    close_text: str,
    *,
    span: Optional[str] = None,
    ignore_escaped_close: bool = False,
) -> list[Rule]:
    token = Token(token_kind, open_text, close_text, span)
    inside = State(state_kind, span if span is not None else open_text)
    return [
        _rule(open_text, _emit(Kind.OPENING, token, open_text, inside)),
        _rule(
            close_text,
            _emit(Kind.CLOSING, token, close_text, NORMAL),
            input_state=inside,
            ignore_escaped=ignore_escaped_close,
        ),
    ]


def _char_rules(quote: str) -> list[Rule]:
    token = Token(TokenKind.STRING, quote)
    quote_byte = quote.encode("utf-8")[0]

    def closed_by(index: int) -> Action:
        def action(step: _Step) -> State:
            col = step.token.col
            step.matches.append(Match(Kind.OPENING, token, col))
            step.matches.append(Match(Kind.CLOSING, token, col + step.distance(index)))
            step.skip(index)
            return NORMAL

        return action

    def first_closes(lookahead: Lookahead) -> bool:
        return len(lookahead) > 0 and lookahead[0][0] == quote_byte and lookahead[0][1] in (1, 2)

    def second_closes(lookahead: Lookahead) -> bool:
        return len(lookahead) > 1 and lookahead[1][0] == quote_byte and lookahead[1][1] == 2

    return [
        _rule(quote, closed_by(1), adjacent=False, condition=first_closes),
        _rule(quote, closed_by(2), adjacent=False, condition=second_closes),
    ]


def _delimiter_rules(open_text: str, close_text: str) -> list[Rule]:
    token = Token(TokenKind.DELIMITER, open_text, close_text)
    close_byte = close_text.encode("utf-8")[0]

    def open_action(step: _Step) -> State:
        step.matches.append(Match(Kind.OPENING, token, step.token.col, len(step.stack)))
        step.stack.append(close_byte)
        return NORMAL

    def close_action(step: _Step) -> State:
        if step.stack and step.stack[-1] == step.token.byte:
            step.stack.pop()
        step.matches.append(Match(Kind.CLOSING, token, step.token.col, len(step.stack)))
        return NORMAL

    return [_rule(open_text, open_action), _rule(close_text, close_action)]


def build_matcher(definition: LanguageDef) -> Matcher:
    """Compile a language definition into an ordered rule table.

    Block comments and block strings come first, then block spans, line
    comments, strings, character literals, inline spans and finally
    delimiters.
    """
    rules: list[Rule] = []

    for open_text, close_text in definition.block_comments:
        rules += _paired(
            TokenKind.BLOCK_COMMENT, StateKind.IN_BLOCK_COMMENT, open_text, close_text
        )

    for open_text, close_text in definition.block_strings:
        rules += _paired(
            TokenKind.BLOCK_STRING,
            StateKind.IN_BLOCK_STRING,
            open_text,
            close_text,
            ignore_escaped_close=True,
        )

    for name, (open_text, close_text) in definition.block_spans.items():
        rules += _paired(
            TokenKind.BLOCK_SPAN, StateKind.IN_BLOCK_SPAN, open_text, close_text, span=name
        )

    for comment in definition.line_comments:
        token = Token(TokenKind.LINE_COMMENT, comment)
        rules.append(
            _rule(
                comment,
                _emit(Kind.NON_PAIR, token, comment, State(StateKind.IN_LINE_COMMENT)),
            )
        )

    for quote in definition.strings:
        token = Token(TokenKind.STRING, quote)
        inside = State(StateKind.IN_STRING, quote)
        rules.append(_rule(quote, _emit(Kind.OPENING, token, quote, inside)))
        rules.append(
            _rule(
                quote,
                _emit(Kind.CLOSING, token, quote, NORMAL),
                input_state=inside,
                ignore_escaped=True,
            )
        )

    for quote in definition.chars:
        rules += _char_rules(quote)

    for name, (open_text, close_text) in definition.inline_spans.items():
        rules += _paired(
            TokenKind.INLINE_SPAN, StateKind.IN_INLINE_SPAN, open_text, close_text, span=name
        )

    for open_text, close_text in definition.delimiters:
        rules += _delimiter_rules(open_text, close_text)

    return Matcher(
        name=definition.name,
        token_bytes=collect_tokens(definition),
        max_lookahead=calculate_max_lookahead(definition),
        rules=tuple(rules),
    )