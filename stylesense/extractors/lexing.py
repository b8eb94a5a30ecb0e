"""Shallow lexical helpers shared by extractor implementations.

Nothing here parses a grammar. The scanner only tracks enough state to tell
code apart from comments and string literals, which is all the extractors
need to read indentation, delimiters and declaration names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

PYTHON = "Python"
JAVASCRIPT = "JavaScript"
TYPESCRIPT = "TypeScript"
JAVA = "Java"
KOTLIN = "Kotlin"
GO = "Go"
RUST = "Rust"
RUBY = "Ruby"
PHP = "PHP"
CSHARP = "C#"
C = "C"
CPP = "C++"
SWIFT = "Swift"
SCALA = "Scala"
DART = "Dart"
SHELL = "Shell"

JS_FAMILY: FrozenSet[str] = frozenset({JAVASCRIPT, TYPESCRIPT})
C_FAMILY: FrozenSet[str] = frozenset(
    {JAVASCRIPT, TYPESCRIPT, JAVA, KOTLIN, GO, RUST, PHP, CSHARP, C, CPP, SWIFT, SCALA, DART}
)

_HASH_COMMENT = frozenset({PYTHON, RUBY, SHELL, PHP, "R", "Perl", "PowerShell", "Julia", "YAML", "TOML"})
_SLASH_COMMENT = C_FAMILY | frozenset({"Objective-C", "Objective-C++"})
_TRIPLE_QUOTES = frozenset({PYTHON, KOTLIN, SWIFT, SCALA})
_BACKTICK_STRINGS = frozenset({JAVASCRIPT, TYPESCRIPT, GO})
_NO_SINGLE_QUOTE_STRINGS = frozenset({RUST})


@dataclass(frozen=True)
class Literal:
    """A string literal found by the scanner."""

    quote: str
    body: str
    triple: bool = False


@dataclass
class ScanResult:
    """Per-line code text plus every completed string literal.

    ``lines`` holds one entry per physical line: the line with comments
    removed and literal bodies blanked (leading whitespace kept), or ``None``
    when the line starts inside a multi-line comment or string.
    """

    lines: List[Optional[str]] = field(default_factory=list)
    literals: List[Literal] = field(default_factory=list)

    def code_lines(self) -> List[str]:
        """Return non-blank code lines, skipping comment-only and continuation lines."""
        return [line for line in self.lines if line is not None and line.strip()]


def scan(content: str, language: str) -> ScanResult:
    """Split ``content`` into code, comments and string literals."""
    hash_comments = language in _HASH_COMMENT
    slash_comments = language in _SLASH_COMMENT
    quotes = {'"'}
    if language not in _NO_SINGLE_QUOTE_STRINGS:
        quotes.add("'")
    if language in _BACKTICK_STRINGS:
        quotes.add("`")
    triple_enabled = language in _TRIPLE_QUOTES

    result = ScanResult()
    buffer: List[str] = []
    line_in_code = True
    state = "code"
    quote = ""
    triple = False
    body: List[str] = []

    text = content.replace("\r\n", "\n").replace("\r", "\n")
    index = 0
    length = len(text)

    def _finish_line() -> None:
        nonlocal buffer, line_in_code
        result.lines.append("".join(buffer).rstrip() if line_in_code else None)
        buffer = []
        line_in_code = state == "code"

    while index < length:
        char = text[index]

        if state == "code":
            if char == "\n":
                _finish_line()
                index += 1
                continue
            if slash_comments and text.startswith("/*", index):
                state = "block"
                index += 2
                continue
            if (slash_comments and text.startswith("//", index)) or (hash_comments and char == "#"):
                newline = text.find("\n", index)
                index = length if newline == -1 else newline
                continue
            if char in quotes:
                triple = triple_enabled and text.startswith(char * 3, index)
                quote = char
                body = []
                state = "string"
                delimiter = char * 3 if triple else char
                buffer.append(delimiter)
                index += len(delimiter)
                continue
            buffer.append(char)
            index += 1
            continue

        if state == "block":
            if text.startswith("*/", index):
                state = "code"
                index += 2
                continue
            if char == "\n":
                _finish_line()
            index += 1
            continue

        # state == "string"
        if char == "\\" and index + 1 < length:
            body.append(text[index : index + 2])
            if text[index + 1] == "\n":
                _finish_line()
            index += 2
            continue
        closing = quote * 3 if triple else quote
        if text.startswith(closing, index):
            result.literals.append(Literal(quote=quote, body="".join(body), triple=triple))
            buffer.append(closing)
            state = "code"
            index += len(closing)
            continue
        if char == "\n":
            if not triple and quote != "`":
                # Unterminated single-line literal; drop it.
                state = "code"
                _finish_line()
                index += 1
                continue
            body.append(char)
            _finish_line()
            index += 1
            continue
        body.append(char)
        index += 1

    if buffer or (text and not text.endswith("\n")):
        _finish_line()
    return result


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


_WORD_CHARS = re.compile(r"^[A-Za-z0-9_]+$")

SNAKE_CASE = "snake_case"
CAMEL_CASE = "camelCase"
PASCAL_CASE = "PascalCase"
UPPER_SNAKE_CASE = "UPPER_SNAKE_CASE"
CASE_STYLES: FrozenSet[str] = frozenset({SNAKE_CASE, CAMEL_CASE, PASCAL_CASE, UPPER_SNAKE_CASE})


def classify_case(identifier: str) -> Optional[str]:
    """Return the casing convention of ``identifier``.

    Single lowercase words and single letters fit several conventions at once
    and return None, as do dunder names and mixed forms like ``get_HTTPValue``.
    """
    if identifier.startswith("__") and identifier.endswith("__"):
        return None
    name = identifier.strip("_$")
    if not name or not _WORD_CHARS.match(name) or not name[0].isalpha():
        return None
    letters = [ch for ch in name if ch.isalpha()]
    if len(letters) < 2:
        return None

    if "_" in name:
        if all(ch.isupper() for ch in letters):
            return UPPER_SNAKE_CASE
        if all(ch.islower() for ch in letters):
            return SNAKE_CASE
        return None
    if all(ch.isupper() for ch in letters):
        return UPPER_SNAKE_CASE
    if all(ch.islower() for ch in letters):
        return None
    if name[0].isupper():
        return PASCAL_CASE
    return CAMEL_CASE
