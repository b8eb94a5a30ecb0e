"""Extractor for line terminators."""

from __future__ import annotations

from typing import Optional

from .base import FeatureExtractor, majority
from ..models import SourceSample

LF = "lf"
CRLF = "crlf"


class LineEndingExtractor(FeatureExtractor):
    kind = "line-ending"
    domain = frozenset({LF, CRLF})

    def observe(self, sample: SourceSample) -> Optional[str]:
        crlf = sample.content.count("\r\n")
        lf = sample.content.count("\n") - crlf
        return majority({LF: lf, CRLF: crlf})
