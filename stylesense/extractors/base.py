"""Base classes for feature extractor plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, FrozenSet, List, Optional

from ..logging import get_logger
from ..models import Observation, SourceSample

_logger = get_logger("extractors")


class ExtractorContractError(RuntimeError):
    """Raised when an extractor reports a value outside its declared domain."""


class FeatureExtractor(ABC):
    """Contract for extractors that vote one value per sample for a feature kind."""

    kind: ClassVar[str]
    domain: ClassVar[FrozenSet[str]]
    #: Languages the extractor understands; ``None`` means every language.
    languages: ClassVar[Optional[FrozenSet[str]]] = None
    cache_version: ClassVar[str] = "1"

    def parameters(self) -> Dict[str, object]:
        """Constructor settings that change what the extractor observes."""
        return {}

    def supports(self, sample: SourceSample) -> bool:
        """Return True when the sample's language is understood."""
        return self.languages is None or sample.language in self.languages

    def extract(self, sample: SourceSample) -> List[Observation]:
        """Return zero or one observation for the sample."""
        if not self.supports(sample) or "\x00" in sample.content:
            return []
        try:
            value = self.observe(sample)
        except Exception as exc:
            _logger.debug("%s abstained on %s: %s", self.kind, sample.path, exc)
            return []
        if value is None:
            return []
        if value not in self.domain:
            raise ExtractorContractError(
                f"{type(self).__name__} produced '{value}' outside the {self.kind} domain"
            )
        return [Observation(kind=self.kind, value=value, source=sample.path)]

    @abstractmethod
    def observe(self, sample: SourceSample) -> Optional[str]:
        """Return the sample's value for this kind, or None to abstain."""


def majority(votes: dict) -> Optional[str]:
    """Return the single most frequent key, or None when empty or tied."""
    if not votes:
        return None
    top = max(votes.values())
    if top <= 0:
        return None
    leaders = [value for value, count in votes.items() if count == top]
    if len(leaders) != 1:
        return None
    return leaders[0]
