"""Extractor for opening brace placement in C-family languages."""

from __future__ import annotations

import re
from typing import Optional

from .base import FeatureExtractor, majority
from .lexing import C_FAMILY, scan
from ..models import SourceSample

SAME_LINE = "same-line"
NEXT_LINE = "next-line"

_LITERAL_OPENER = re.compile(r"(?:\breturn|\byield|\bthrow|\bcase|\bin|\bof|=)\s*\{$")


def _is_block_header(text: str) -> bool:
    """True when ``text`` can legitimately be followed by a block opener."""
    if not text:
        return False
    last = text[-1]
    return last == ")" or last == ">" or last.isalnum() or last == "_"


class BraceStyleExtractor(FeatureExtractor):
    """Classifies block openers as same-line (K&R) or next-line (Allman)."""

    kind = "brace-style"
    domain = frozenset({SAME_LINE, NEXT_LINE})
    languages = C_FAMILY

    def observe(self, sample: SourceSample) -> Optional[str]:
        votes = {SAME_LINE: 0, NEXT_LINE: 0}
        previous = ""
        for line in scan(sample.content, sample.language).code_lines():
            text = line.strip()
            if text == "{":
                if _is_block_header(previous):
                    votes[NEXT_LINE] += 1
            elif text.endswith("{") and not _LITERAL_OPENER.search(text):
                head = text[:-1].rstrip()
                if _is_block_header(head):
                    votes[SAME_LINE] += 1
            previous = text
        return majority(votes)
