"""Extractor for trailing commas in multi-line collections and calls."""

from __future__ import annotations

from typing import List, Optional

from .base import FeatureExtractor, majority
from .lexing import JAVASCRIPT, PHP, PYTHON, RUST, TYPESCRIPT, scan
from ..models import SourceSample

ALWAYS = "always"
NEVER = "never"

_CLOSERS = (")", "]", "}")
_OPENERS = ("(", "[", "{")


class TrailingCommaExtractor(FeatureExtractor):
    """Looks at the last element line before a line that closes a bracket.

    A bracket body only counts as a collection or argument list once one of
    its own lines has ended with a comma. Code blocks never do, so the last
    statement of a block is not mistaken for an element.
    """

    kind = "trailing-comma"
    domain = frozenset({ALWAYS, NEVER})
    languages = frozenset({PYTHON, JAVASCRIPT, TYPESCRIPT, RUST, PHP})

    def observe(self, sample: SourceSample) -> Optional[str]:
        votes = {ALWAYS: 0, NEVER: 0}
        # One flag per open bracket: has a line directly inside it ended with ",".
        separated: List[bool] = []
        previous = ""
        for line in scan(sample.content, sample.language).code_lines():
            text = line.strip()
            if text.startswith(_CLOSERS) and separated and previous and not previous.endswith(_OPENERS):
                if previous.endswith(","):
                    votes[ALWAYS] += 1
                elif separated[-1] and _is_element(previous):
                    votes[NEVER] += 1
            for char in text:
                if char in _OPENERS:
                    separated.append(False)
                elif char in _CLOSERS and separated:
                    separated.pop()
            if text.endswith(",") and separated:
                separated[-1] = True
            previous = text
        return majority(votes)


def _is_element(text: str) -> bool:
    if text.endswith((";", ":", "{", "}")):
        return False
    first = text.split(None, 1)[0]
    return first not in {"return", "break", "continue", "pass", "raise", "throw", "else"}
