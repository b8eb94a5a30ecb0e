"""Extractors for identifier casing, scoped by declaration role.

A file legitimately mixes conventions across roles (``snake_case`` functions
next to ``PascalCase`` classes), so every role is its own feature kind and
declarations are never pooled across roles.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .base import FeatureExtractor, majority
from .lexing import (
    CASE_STYLES,
    CSHARP,
    GO,
    JAVA,
    JAVASCRIPT,
    KOTLIN,
    PYTHON,
    RUBY,
    RUST,
    TYPESCRIPT,
    classify_case,
    scan,
)
from ..models import SourceSample

VARIABLE = "variable"
FUNCTION = "function"
TYPE = "type"
CONSTANT = "constant"
ROLES = (VARIABLE, FUNCTION, TYPE, CONSTANT)

Declaration = Tuple[str, str]

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_JS_IDENT = r"[A-Za-z_$][\w$]*"

# Python ---------------------------------------------------------------------

_PY_DEF = re.compile(rf"^\s*(?:async\s+)?def\s+({_IDENT})")
_PY_CLASS = re.compile(rf"^\s*class\s+({_IDENT})")
_PY_ASSIGN = re.compile(rf"^(\s*)({_IDENT})\s*(?::\s*([^=]+?))?\s*=(?!=)\s*(.*)$")
_PY_LITERAL = re.compile(
    r"""^(?:[-+]?\d|[rbfuRBFU]{0,2}["']|True\b|False\b|None\b|\(|\[|\{|frozenset\(|re\.compile\()"""
)


def _bracket_balance(line: str) -> int:
    return sum(line.count(opener) for opener in "([{") - sum(line.count(closer) for closer in ")]}")


def _python_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    depth = 0
    for line in lines:
        # Parameters and keyword arguments on continuation lines are not bindings.
        inside_brackets = depth > 0
        depth = max(0, depth + _bracket_balance(line))
        match = _PY_DEF.match(line)
        if match:
            yield FUNCTION, match.group(1)
            continue
        match = _PY_CLASS.match(line)
        if match:
            yield TYPE, match.group(1)
            continue
        if inside_brackets:
            continue
        match = _PY_ASSIGN.match(line)
        if match:
            indent, name, annotation, value = match.groups()
            is_final = annotation is not None and "Final" in annotation
            if not indent and (is_final or _PY_LITERAL.match(value)):
                yield CONSTANT, name
            else:
                yield VARIABLE, name


# JavaScript / TypeScript ----------------------------------------------------

_JS_FUNCTION = re.compile(
    rf"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*({_JS_IDENT})"
)
_JS_TYPE = re.compile(
    rf"^\s*(?:export\s+)?(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?"
    rf"(?:class|interface|type|enum)\s+({_JS_IDENT})"
)
_JS_BINDING = re.compile(
    rf"^(\s*)(?:export\s+)?(const|let|var)\s+({_JS_IDENT})\s*(?::[^=]+)?=(?!=)\s*(.*)$"
)
_JS_METHOD = re.compile(
    rf"^\s+(?:(?:static|async|public|private|protected|readonly|override|get|set)\s+)*"
    rf"({_JS_IDENT})\s*\([^)]*\)\s*(?::\s*[^{{]+)?\{{$"
)
_JS_FUNCTION_VALUE = re.compile(r"^(?:async\s+)?(?:function\b|\([^)]*\)\s*(?::[^=]+)?=>|[\w$]+\s*=>)")
_JS_PRIMITIVE = re.compile(r"""^(?:[-+]?\d|["'`]|true\b|false\b|null\b)""")
_JS_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "function", "return", "constructor"})


def _javascript_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    for line in lines:
        match = _JS_FUNCTION.match(line)
        if match:
            yield FUNCTION, match.group(1)
            continue
        match = _JS_TYPE.match(line)
        if match:
            yield TYPE, match.group(1)
            continue
        match = _JS_BINDING.match(line)
        if match:
            indent, keyword, name, value = match.groups()
            if _JS_FUNCTION_VALUE.match(value):
                yield FUNCTION, name
            elif keyword == "const" and not indent and _JS_PRIMITIVE.match(value):
                yield CONSTANT, name
            else:
                yield VARIABLE, name
            continue
        match = _JS_METHOD.match(line)
        if match and match.group(1) not in _JS_KEYWORDS:
            yield FUNCTION, match.group(1)


# Java / C# / Kotlin ---------------------------------------------------------

_MODIFIERS = (
    r"(?:public|private|protected|internal|static|final|abstract|sealed|synchronized|"
    r"native|override|virtual|async|open|suspend|inline|readonly)"
)
_JVM_TYPE = re.compile(
    rf"^\s*(?:{_MODIFIERS}\s+|data\s+|partial\s+)*(?:class|interface|enum|record|struct|object)\s+({_IDENT})"
)
_JVM_CONSTANT = re.compile(
    rf"^\s*(?:{_MODIFIERS}\s+)*(?:static\s+final|final\s+static|const)\s+"
    rf"(?:[\w<>\[\],.?]+\s+)?({_IDENT})\s*[=:]"
)
_JVM_METHOD = re.compile(
    rf"^\s*(?:{_MODIFIERS}\s+)+(?:<[^>]+>\s+)?[\w<>\[\],.?]+\s+({_IDENT})\s*\("
)
_KOTLIN_FUN = re.compile(rf"^\s*(?:{_MODIFIERS}\s+)*fun\s+(?:<[^>]+>\s+)?(?:[\w.]+\.)?({_IDENT})\s*\(")
_KOTLIN_BINDING = re.compile(rf"^\s*(?:{_MODIFIERS}\s+)*(?:val|var)\s+({_IDENT})")
_JVM_VARIABLE = re.compile(
    rf"^\s*(?:(?:private|protected|public|internal|final|readonly)\s+)*"
    rf"({_IDENT})(?:<[^=;]*>)?(?:\[\])*\s+({_IDENT})\s*(?:=(?!=)|;)"
)
_JVM_NOT_TYPES = frozenset(
    {"return", "throw", "new", "else", "package", "import", "case", "goto", "yield", "using", "namespace", "await"}
)


def _jvm_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    for line in lines:
        match = _JVM_TYPE.match(line)
        if match:
            yield TYPE, match.group(1)
            continue
        match = _JVM_CONSTANT.match(line)
        if match:
            yield CONSTANT, match.group(1)
            continue
        match = _KOTLIN_FUN.match(line) or _JVM_METHOD.match(line)
        if match:
            yield FUNCTION, match.group(1)
            continue
        match = _KOTLIN_BINDING.match(line)
        if match:
            yield VARIABLE, match.group(1)
            continue
        match = _JVM_VARIABLE.match(line)
        if match and match.group(1) not in _JVM_NOT_TYPES:
            yield VARIABLE, match.group(2)


# Go -------------------------------------------------------------------------

_GO_FUNC = re.compile(rf"^func\s+(?:\([^)]*\)\s*)?({_IDENT})")
_GO_TYPE = re.compile(rf"^\s*type\s+({_IDENT})\s+")
_GO_CONST = re.compile(rf"^\s*const\s+({_IDENT})\b")
_GO_VAR = re.compile(rf"^\s*var\s+({_IDENT})\b")
_GO_SHORT = re.compile(rf"^\s*({_IDENT})(?:\s*,\s*{_IDENT})*\s*:=")
_GO_BLOCK_ENTRY = re.compile(rf"^\s+({_IDENT})\b(?:\s+[\w.\[\]*]+)?\s*(?:=|$)")


def _go_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    block: Optional[str] = None
    for line in lines:
        text = line.strip()
        if block is not None:
            if text == ")":
                block = None
                continue
            match = _GO_BLOCK_ENTRY.match(line)
            if match:
                yield block, match.group(1)
            continue
        if text in ("const (", "var ("):
            block = CONSTANT if text.startswith("const") else VARIABLE
            continue
        for pattern, role in (
            (_GO_FUNC, FUNCTION),
            (_GO_TYPE, TYPE),
            (_GO_CONST, CONSTANT),
            (_GO_VAR, VARIABLE),
            (_GO_SHORT, VARIABLE),
        ):
            match = pattern.match(line)
            if match:
                yield role, match.group(1)
                break


# Rust -----------------------------------------------------------------------

_RUST_RULES = (
    (re.compile(rf"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?(?:unsafe\s+)?fn\s+({_IDENT})"), FUNCTION),
    (re.compile(rf"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:struct|enum|trait|type|union)\s+({_IDENT})"), TYPE),
    (re.compile(rf"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:const|static)\s+(?:mut\s+)?({_IDENT})\s*:"), CONSTANT),
    (re.compile(rf"^\s*let\s+(?:mut\s+)?({_IDENT})\b"), VARIABLE),
)


def _rust_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    for line in lines:
        for pattern, role in _RUST_RULES:
            match = pattern.match(line)
            if match:
                yield role, match.group(1)
                break


# Ruby -----------------------------------------------------------------------

_RUBY_RULES = (
    (re.compile(rf"^\s*def\s+(?:self\.)?({_IDENT})[?!=]?"), FUNCTION),
    (re.compile(rf"^\s*(?:class|module)\s+({_IDENT})"), TYPE),
    (re.compile(r"^\s*([A-Z][A-Za-z0-9_]*)\s*=(?![=~])"), CONSTANT),
    (re.compile(r"^\s*([a-z_][A-Za-z0-9_]*)\s*=(?![=~>])"), VARIABLE),
)


def _ruby_declarations(lines: Iterable[str]) -> Iterator[Declaration]:
    for line in lines:
        for pattern, role in _RUBY_RULES:
            match = pattern.match(line)
            if match:
                yield role, match.group(1)
                break


_DECLARATION_READERS: Dict[str, Callable[[Iterable[str]], Iterator[Declaration]]] = {
    PYTHON: _python_declarations,
    JAVASCRIPT: _javascript_declarations,
    TYPESCRIPT: _javascript_declarations,
    JAVA: _jvm_declarations,
    CSHARP: _jvm_declarations,
    KOTLIN: _jvm_declarations,
    GO: _go_declarations,
    RUST: _rust_declarations,
    RUBY: _ruby_declarations,
}


def collect_declarations(sample: SourceSample) -> Dict[str, List[str]]:
    """Return declared identifiers grouped by role."""
    reader = _DECLARATION_READERS.get(sample.language)
    grouped: Dict[str, List[str]] = {role: [] for role in ROLES}
    if reader is None:
        return grouped
    lines = scan(sample.content, sample.language).code_lines()
    for role, name in reader(lines):
        grouped[role].append(name)
    return grouped


class NamingExtractor(FeatureExtractor):
    """Dominant identifier casing for a single declaration role."""

    role: str
    domain = CASE_STYLES
    languages = frozenset(_DECLARATION_READERS)

    def observe(self, sample: SourceSample) -> Optional[str]:
        names = collect_declarations(sample)[self.role]
        styles = Counter(style for style in map(classify_case, names) if style is not None)
        return majority(dict(styles))


class VariableNamingExtractor(NamingExtractor):
    kind = "naming-variable"
    role = VARIABLE


class FunctionNamingExtractor(NamingExtractor):
    kind = "naming-function"
    role = FUNCTION


class TypeNamingExtractor(NamingExtractor):
    kind = "naming-type"
    role = TYPE


class ConstantNamingExtractor(NamingExtractor):
    kind = "naming-constant"
    role = CONSTANT


__all__ = [
    "ConstantNamingExtractor",
    "FunctionNamingExtractor",
    "TypeNamingExtractor",
    "VariableNamingExtractor",
    "collect_declarations",
]
