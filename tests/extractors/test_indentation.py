"""Tests for indentation extractors."""

from __future__ import annotations

from textwrap import dedent

from stylesense.extractors.indentation import (
    IndentationCharacterExtractor,
    IndentationExtractor,
    IndentationWidthExtractor,
    read_indentation,
)
from stylesense.models import SourceSample


def _sample(language: str, content: str) -> SourceSample:
    return SourceSample(path="src/sample", language=language, content=dedent(content).lstrip())


def _values(extractor, sample: SourceSample) -> list[str]:
    return [observation.value for observation in extractor.extract(sample)]


def test_four_space_python() -> None:
    sample = _sample(
        "Python",
        """
        def handle(event):
            if event:
                return event.name
            return None
        """,
    )
    assert _values(IndentationExtractor(), sample) == ["space-4"]
    assert _values(IndentationCharacterExtractor(), sample) == ["space"]
    assert _values(IndentationWidthExtractor(), sample) == ["4"]


def test_two_space_javascript() -> None:
    sample = _sample(
        "JavaScript",
        """
        function render(items) {
          for (const item of items) {
            draw(item);
          }
        }
        """,
    )
    assert _values(IndentationExtractor(), sample) == ["space-2"]


def test_tabs_report_no_width() -> None:
    sample = SourceSample(
        path="main.go",
        language="Go",
        content="func main() {\n\tif ready {\n\t\tstart()\n\t}\n}\n",
    )
    assert _values(IndentationExtractor(), sample) == ["tab"]
    assert _values(IndentationCharacterExtractor(), sample) == ["tab"]
    assert _values(IndentationWidthExtractor(), sample) == []


def test_flat_file_abstains() -> None:
    sample = _sample("Python", "x = 1\ny = 2\n")
    assert IndentationExtractor().extract(sample) == []
    assert IndentationCharacterExtractor().extract(sample) == []


def test_docstring_bodies_do_not_count() -> None:
    sample = _sample(
        "Python",
        '''
        def handle(event):
            """Summary.

               Indented prose that is not code.
            """
            return event
        ''',
    )
    reading = read_indentation(sample)
    assert reading.character == "space"
    assert reading.width == 4


def test_observation_carries_sample_path() -> None:
    sample = _sample("Python", "def f():\n    return 1\n")
    (observation,) = IndentationExtractor().extract(sample)
    assert observation.kind == "indentation"
    assert observation.source == "src/sample"
