"""Built-in language definitions, looked up by editor filetype."""

from __future__ import annotations

from types import MappingProxyType

from .definition import LanguageDef, Pair

_BRACKETS: tuple[Pair, ...] = (("(", ")"), ("[", "]"), ("{", "}"))
_C_BLOCK_COMMENT: tuple[Pair, ...] = (("/*", "*/"),)


def _spans(*entries: tuple[str, str, str]) -> dict[str, Pair]:
    """Build a span table; a later entry with the same name replaces an earlier one."""
    table: dict[str, Pair] = {}
    for name, open_text, close_text in entries:
        table[name] = (open_text, close_text)
    return table


C = LanguageDef(
    "C",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    strings=('"',),
)

CLOJURE = LanguageDef(
    "Clojure",
    delimiters=_BRACKETS,
    line_comments=(";",),
    strings=('"',),
)

CPP = LanguageDef(
    "Cpp",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    strings=('"',),
    block_strings=(('R"(', ')"'),),
)

CSHARP = LanguageDef(
    "CSharp",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    strings=('"',),
    block_strings=(('@"', '"'),),
)

DART = LanguageDef(
    "Dart",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"', "'"),
    block_strings=(('"""', '"""'), ("'''", "'''")),
)

ELIXIR = LanguageDef(
    "Elixir",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"',),
    block_strings=(('"""', '"""'),),
)

ERLANG = LanguageDef(
    "Erlang",
    delimiters=_BRACKETS,
    line_comments=("%",),
    strings=('"',),
)

FSHARP = LanguageDef(
    "FSharp",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=(("(*", "*)"),),
    strings=('"',),
    block_strings=(('"""', '"""'),),
)

GO = LanguageDef(
    "Go",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"',),
    block_strings=(("`", "`"),),
)

HASKELL = LanguageDef(
    "Haskell",
    delimiters=_BRACKETS,
    line_comments=("--",),
    block_comments=(("{-", "-}"),),
    strings=('"',),
)

HAXE = LanguageDef(
    "Haxe",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    strings=('"',),
)

JAVA = LanguageDef(
    "Java",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    strings=('"',),
    block_strings=(('"""', '"""'),),
)

JAVASCRIPT = LanguageDef(
    "JavaScript",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"', "'"),
    block_strings=(("`", "`"),),
)

# Includes the comments of jsonc and json5
JSON = LanguageDef(
    "Json",
    delimiters=(("[", "]"), ("{", "}")),
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"',),
)

KOTLIN = LanguageDef(
    "Kotlin",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"',),
    block_strings=(('"""', '"""'),),
)

LATEX = LanguageDef(
    "Latex",
    delimiters=_BRACKETS,
    line_comments=("%",),
    strings=('"',),
    chars=("'",),
    block_strings=(("$", "$"), ("$$", "$$")),
)

LEAN = LanguageDef(
    "Lean",
    delimiters=_BRACKETS,
    line_comments=("--",),
    block_comments=(("/-", "-/"),),
    strings=('"',),
)

LUA = LanguageDef(
    "Lua",
    delimiters=_BRACKETS,
    line_comments=("--",),
    block_comments=(("--[[", "]]"),),
    strings=('"', "'"),
    block_strings=(("[[", "]]"),),
)

MARKDOWN = LanguageDef(
    "Markdown",
    inline_spans=_spans(
        ("math", "$", "$"),
        ("italic", "_", "_"),
        ("bold", "*", "*"),
        ("bold", "**", "**"),
        ("strikethrough", "~~", "~~"),
    ),
    block_spans=_spans(
        ("math", "$$", "$$"),
        ("code", "```", "```"),
    ),
)

OBJC = LanguageDef(
    "ObjC",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"',),
)

OCAML = LanguageDef(
    "OCaml",
    delimiters=_BRACKETS,
    block_comments=(("(*", "*)"),),
    strings=('"',),
)

PERL = LanguageDef(
    "Perl",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"', "'"),
)

PHP = LanguageDef(
    "Php",
    delimiters=_BRACKETS,
    line_comments=("//", "#"),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"', "'"),
)

PYTHON = LanguageDef(
    "Python",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"', "'"),
    block_strings=(('"""', '"""'), ("'''", "'''")),
)

R = LanguageDef(
    "R",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"', "'"),
)

RUBY = LanguageDef(
    "Ruby",
    delimiters=_BRACKETS,
    line_comments=("#",),
    block_comments=(("=begin", "end"),),
    strings=('"', "'"),
)

RUST = LanguageDef(
    "Rust",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    chars=("'",),
    block_strings=(
        ('"', '"'),
        ('r#"', '"#'),
        ('r##"', '"##'),
        ('r###"', '"###'),
    ),
)

SCALA = LanguageDef(
    "Scala",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"',),
    block_strings=(('"""', '"""'),),
)

SHELL = LanguageDef(
    "Shell",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"', "'"),
)

SWIFT = LanguageDef(
    "Swift",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"', "'"),
    block_strings=(('"""', '"""'),),
)

TOML = LanguageDef(
    "Toml",
    delimiters=_BRACKETS,
    line_comments=("#",),
    strings=('"', "'"),
    block_strings=(('"""', '"""'),),
)

TYPST = LanguageDef(
    "Typst",
    delimiters=_BRACKETS,
    line_comments=("//",),
    block_comments=_C_BLOCK_COMMENT,
    strings=('"', "'"),
)

# Multiline string literals are consecutive lines starting with a double
# backslash; lacking distinct open and close markers, they are treated as
# line comments.
ZIG = LanguageDef(
    "Zig",
    delimiters=_BRACKETS,
    line_comments=("//", "\\\\"),
    strings=('"',),
)

_BY_FILETYPE = MappingProxyType(
    {
        "c": C,
        "clojure": CLOJURE,
        "cpp": CPP,
        "csharp": CSHARP,
        "dart": DART,
        "elixir": ELIXIR,
        "erlang": ERLANG,
        "fsharp": FSHARP,
        "go": GO,
        "haskell": HASKELL,
        "haxe": HAXE,
        "java": JAVA,
        "javascript": JAVASCRIPT,
        "json": JSON,
        "kotlin": KOTLIN,
        "latex": LATEX,
        "lean": LEAN,
        "lua": LUA,
        "markdown": MARKDOWN,
        "objc": OBJC,
        "ocaml": OCAML,
        "perl": PERL,
        "php": PHP,
        "python": PYTHON,
        "r": R,
        "ruby": RUBY,
        "rust": RUST,
        "scala": SCALA,
        "shell": SHELL,
        "swift": SWIFT,
        "toml": TOML,
        "typst": TYPST,
        "zig": ZIG,
    }
)


def get_language(filetype: str) -> LanguageDef | None:
    """Definition for an editor filetype, or None if it is not supported."""
    return _BY_FILETYPE.get(filetype)


def filetypes() -> tuple[str, ...]:
    """All supported filetypes, in alphabetical order."""
    return tuple(sorted(_BY_FILETYPE))