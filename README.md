# blink_pairs

Finds matching delimiters (`()`, `[]`, `{}`), strings, block strings,
comments and Markdown-style spans in source code, line by line. It is
meant to sit behind an editor: parse a buffer once, re-parse only the
lines that changed, and ask for the pair under the cursor.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Supported filetypes

c, clojure, cpp, csharp, dart, elixir, erlang, fsharp, go, haskell, haxe,
java, javascript, json, kotlin, latex, lean, lua, markdown, objc, ocaml,
perl, php, python, r, ruby, rust, scala, shell, swift, toml, typst, zig.

`blink_pairs.languages.filetypes()` returns this list, and
`blink_pairs.languages.get_language(filetype)` returns the
`LanguageDef` for one filetype, or `None` if it is not supported.

## Usage

### Parsing lines directly

```python
from blink_pairs.parse import parse_filetype
from blink_pairs.tokens import State

matches_by_line, state_by_line = parse_filetype("c", ["{", "}"], State())
for line, matches in enumerate(matches_by_line):
    for m in matches:
        print(line, m.col, m.token.opening(), m.kind, m.stack_height)
```

`parse_filetype` returns `None` for an unknown filetype. Each `Match`
has a `kind` (`Kind.OPENING`, `Kind.CLOSING` or `Kind.NON_PAIR`), a
`token`, a byte column `col` and, for delimiters, a `stack_height`.
`Match.to_dict()` gives a plain dictionary of the same fields.

To use a language of your own, describe it with
`blink_pairs.definition.LanguageDef`, compile it with
`blink_pairs.matcher.build_matcher`, and pass the result to
`blink_pairs.parse.parse(lines, initial_state, matcher)`.

### Working with a buffer

```python
from blink_pairs.buffer import ParsedBuffer

buf = ParsedBuffer.parse("rust", ["fn main() {", "    let x = (1, 2);", "}"])
buf.match_at(0, 10)        # the `{` at line 0, column 10
buf.match_pair(0, 10)      # (opening, closing), each a MatchWithLine
buf.line_matches(1)

# line 1 (up to line 2) was replaced by a single new line
buf.reparse_range("rust", ["    let y = [3];"], 1, 2, 2)
```

`reparse_range` returns `False` for an unknown filetype and raises
`ValueError` when `new_end_line` lies outside the freshly parsed lines.
`span_at(line, col)` reports the name of the inline or block span (for
example `"bold"` or `"code"` in Markdown) that covers a position, and
`state_at_line(line)` the parser state at the end of a line.

### A registry keyed by buffer number

`blink_pairs.api` keeps parsed buffers by number, the way an editor
tracks open buffers:

```python
from blink_pairs import api

api.parse_buffer(1, "python", ["x = [1, 2]"], None, None, None)
api.get_line_matches(1, 0, None)   # list of Match objects, delimiters only
api.get_match_pair(1, 0, 4)        # the `[` and its `]`
```

The first call for a buffer number parses the whole buffer; later calls
re-parse the given range. Pass a `TokenType` value (0 delimiter,
1 string, 2 block string, 3 line comment, 4 block comment) as
`token_type` to select matches of another family; an unknown number
falls back to delimiters. A `BufferRegistry` instance offers the same
methods when a separate, independent registry is wanted.

## What it does not do

This is a library only. It has no command-line tool and no editor
integration of its own: it does not draw highlights or talk to an
editor; the caller supplies the lines and uses the matches it gets back.

## Running the tests

```
pip install .[test]
pytest
```