"""Tests for the semicolon usage extractor."""

from __future__ import annotations

from textwrap import dedent

from stylesense.extractors.semicolons import SemicolonExtractor
from stylesense.models import SourceSample


def _values(content: str, language: str = "JavaScript") -> list[str]:
    sample = SourceSample(path="sample", language=language, content=dedent(content).lstrip())
    return [observation.value for observation in SemicolonExtractor().extract(sample)]


def test_terminated_statements() -> None:
    content = """
        const a = 1;
        let b = a + 2;
        function f() {
          return b;
        }
        """
    assert _values(content) == ["always"]


def test_asi_style() -> None:
    content = """
        const a = 1
        let b = a + 2
        function f() {
          return b
        }
        """
    assert _values(content) == ["never"]


def test_continuation_lines_do_not_vote() -> None:
    content = """
        const total =
          first +
          second;
        """
    assert _values(content, "TypeScript") == ["always"]


def test_only_javascript_family_is_measured() -> None:
    assert _values("x = 1\n", "Python") == []
