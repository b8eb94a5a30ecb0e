"""Extractor for string quote style."""

from __future__ import annotations

from typing import Optional

from .base import FeatureExtractor, majority
from .lexing import DART, JAVASCRIPT, PHP, PYTHON, RUBY, TYPESCRIPT, scan
from ..models import SourceSample

SINGLE = "single"
DOUBLE = "double"

_OPPOSITE = {"'": '"', '"': "'"}


class QuoteStyleExtractor(FeatureExtractor):
    """Counts single- versus double-quoted string literals."""

    kind = "quote-style"
    domain = frozenset({SINGLE, DOUBLE})
    # Languages where either quote delimits an ordinary string.
    languages = frozenset({PYTHON, JAVASCRIPT, TYPESCRIPT, RUBY, PHP, DART})

    def observe(self, sample: SourceSample) -> Optional[str]:
        votes = {SINGLE: 0, DOUBLE: 0}
        for literal in scan(sample.content, sample.language).literals:
            if literal.triple or literal.quote not in _OPPOSITE:
                continue
            if _contains_unescaped(literal.body, _OPPOSITE[literal.quote]):
                continue
            votes[SINGLE if literal.quote == "'" else DOUBLE] += 1
        return majority(votes)


def _contains_unescaped(body: str, char: str) -> bool:
    index = 0
    while index < len(body):
        current = body[index]
        if current == "\\":
            index += 2
            continue
        if current == char:
            return True
        index += 1
    return False
