"""Declarative description of the patterns a language's matcher recognises."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from typing import Iterator

Pair = tuple[str, str]


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def _require_single_byte(text: str, what: str) -> None:
    if _byte_length(text) != 1:
        raise ValueError(f"{what} must be a single character, got {text!r}")


@dataclass(frozen=True)
class LanguageDef:
    """The delimiters, comments, strings and spans of one language.

    ``inline_spans`` and ``block_spans`` map a span name to its opening and
    closing text. Delimiters and character-literal quotes must each be a
    single byte; a ValueError is raised otherwise.
    """

    name: str
    delimiters: tuple[Pair, ...] = ()
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[Pair, ...] = ()
    strings: tuple[str, ...] = ()
    chars: tuple[str, ...] = ()
    block_strings: tuple[Pair, ...] = ()
    inline_spans: dict[str, Pair] = field(default_factory=dict)
    block_spans: dict[str, Pair] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for open_text, close_text in self.delimiters:
            _require_single_byte(open_text, "Delimiter")
            _require_single_byte(close_text, "Delimiter")
        for quote in self.chars:
            _require_single_byte(quote, "Delimiter")

    def patterns(self) -> Iterator[str]:
        """Every opening and closing text the language defines."""
        pairs = chain(
            self.delimiters,
            self.block_comments,
            self.block_strings,
            self.inline_spans.values(),
            self.block_spans.values(),
        )
        yield from chain.from_iterable(pairs)
        yield from self.line_comments
        yield from self.strings
        yield from self.chars


def collect_tokens(definition: LanguageDef) -> bytes:
    """Sorted, unique bytes that occur in any of the definition's patterns."""
    found = {byte for text in definition.patterns() for byte in text.encode("utf-8")}
    return bytes(sorted(found))


def calculate_max_lookahead(definition: LanguageDef) -> int:
    """Number of bytes beyond the current one that matching may inspect.

    Character literals always need two extra bytes so the closing quote of
    something like ``'{'`` can be seen.
    """
    lengths = chain(
        (_byte_length(text) for text in definition.patterns()),
        (_byte_length(quote) + 2 for quote in definition.chars),
    )
    return max(max(lengths, default=0) - 1, 0)