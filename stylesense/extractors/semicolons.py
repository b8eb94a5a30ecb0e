"""Extractor for statement-terminating semicolons in JavaScript and TypeScript."""

from __future__ import annotations

import re
from typing import Optional

from .base import FeatureExtractor, majority
from .lexing import JS_FAMILY, scan
from ..models import SourceSample

ALWAYS = "always"
NEVER = "never"

_CONTINUATION_ENDINGS = (
    "{", "(", "[", ",", ":", "=", "+", "-", "*", "/", "%", "&", "|", "?", ".", "=>", "<", ">", "!",
)
_NON_STATEMENT = re.compile(
    r"^(?:if|else|for|while|do|switch|case|default|try|catch|finally|function|class|interface|enum|@)\b"
)
_BLOCK_CLOSE = re.compile(r"^[}\]]+$")


class SemicolonExtractor(FeatureExtractor):
    """Counts statement-final lines with and without a trailing semicolon."""

    kind = "semicolon-usage"
    domain = frozenset({ALWAYS, NEVER})
    languages = JS_FAMILY

    def observe(self, sample: SourceSample) -> Optional[str]:
        votes = {ALWAYS: 0, NEVER: 0}
        for line in scan(sample.content, sample.language).code_lines():
            text = line.strip()
            if text.endswith(";"):
                if not _NON_STATEMENT.match(text):
                    votes[ALWAYS] += 1
                continue
            if _BLOCK_CLOSE.match(text) or _NON_STATEMENT.match(text):
                continue
            if text.endswith(_CONTINUATION_ENDINGS) and not text.endswith(("++", "--")):
                continue
            votes[NEVER] += 1
        return majority(votes)
