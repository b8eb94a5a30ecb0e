"""Extractor for the line length a file stays within."""

from __future__ import annotations

import math
from typing import Dict, Optional

from .base import FeatureExtractor
from ..models import SourceSample

UNBOUNDED = "unbounded"
_LIMITS = (80, 100, 120)


class LineLengthExtractor(FeatureExtractor):
    """Buckets the given percentile of non-blank line lengths.

    The 95th percentile by default, so a handful of long URLs or generated
    tables do not move a file out of its bucket.
    """

    kind = "line-length-percentile"
    domain = frozenset([str(limit) for limit in _LIMITS] + [UNBOUNDED])

    def __init__(self, percentile: float = 95.0) -> None:
        if not 0 < percentile <= 100:
            raise ValueError(f"percentile must be in (0, 100], got {percentile}")
        self.percentile = percentile

    def parameters(self) -> Dict[str, object]:
        return {"percentile": self.percentile}

    def observe(self, sample: SourceSample) -> Optional[str]:
        lengths = sorted(
            len(line.rstrip().expandtabs(4))
            for line in sample.content.splitlines()
            if line.strip()
        )
        if not lengths:
            return None
        rank = max(1, math.ceil(self.percentile / 100 * len(lengths)))
        value = lengths[rank - 1]
        for limit in _LIMITS:
            if value <= limit:
                return str(limit)
        return UNBOUNDED
