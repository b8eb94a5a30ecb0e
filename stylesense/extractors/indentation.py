"""Extractors for indentation character and width."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from .base import FeatureExtractor, majority
from .lexing import leading_whitespace, scan
from ..models import SourceSample

TAB = "tab"
SPACE = "space"
_WIDTHS = (2, 4, 8)


@dataclass(frozen=True)
class IndentReading:
    character: Optional[str]
    width: Optional[int]


def read_indentation(sample: SourceSample) -> IndentReading:
    """Measure the leading whitespace of non-blank, non-comment-only lines."""
    lines = scan(sample.content, sample.language).code_lines()

    characters: Counter[str] = Counter()
    for line in lines:
        prefix = leading_whitespace(line)
        if not prefix:
            continue
        characters[TAB if prefix[0] == "\t" else SPACE] += 1

    steps: Counter[int] = Counter()
    previous: Optional[int] = None
    for line in lines:
        prefix = leading_whitespace(line)
        if "\t" in prefix:
            previous = None
            continue
        depth = len(prefix)
        if previous is not None and depth > previous:
            step = depth - previous
            if step in _WIDTHS:
                steps[step] += 1
        previous = depth

    width = majority(dict(steps))
    return IndentReading(character=majority(dict(characters)), width=width)


class IndentationCharacterExtractor(FeatureExtractor):
    """Tabs versus spaces."""

    kind = "indentation-character"
    domain = frozenset({TAB, SPACE})

    def observe(self, sample: SourceSample) -> Optional[str]:
        return read_indentation(sample).character


class IndentationWidthExtractor(FeatureExtractor):
    """Indent step of space-indented files."""

    kind = "indentation-width"
    domain = frozenset(str(width) for width in _WIDTHS)

    def observe(self, sample: SourceSample) -> Optional[str]:
        reading = read_indentation(sample)
        if reading.character != SPACE or reading.width is None:
            return None
        return str(reading.width)


class IndentationExtractor(FeatureExtractor):
    """Combined indentation unit: ``tab`` or ``space-<width>``."""

    kind = "indentation"
    domain = frozenset([TAB] + [f"{SPACE}-{width}" for width in _WIDTHS])

    def observe(self, sample: SourceSample) -> Optional[str]:
        reading = read_indentation(sample)
        if reading.character == TAB:
            return TAB
        if reading.character == SPACE and reading.width is not None:
            return f"{SPACE}-{reading.width}"
        return None
