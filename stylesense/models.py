"""Core data models shared across stylesense components."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SourceSample:
    """One already-loaded source file."""

    path: str
    language: str
    content: str

    @property
    def fingerprint(self) -> str:
        return hashlib.sha256(self.content.encode("utf-8", "surrogatepass")).hexdigest()


@dataclass(frozen=True)
class SampleSet:
    """Ordered, immutable collection of samples for one declared language."""

    language: str
    samples: Tuple[SourceSample, ...] = ()

    def __post_init__(self) -> None:
        samples = tuple(self.samples)
        seen: set[str] = set()
        for sample in samples:
            if not isinstance(sample, SourceSample):
                raise TypeError(f"SampleSet entries must be SourceSample, got {type(sample).__name__}")
            if sample.path in seen:
                raise ValueError(f"Duplicate sample path: {sample.path}")
            seen.add(sample.path)
        object.__setattr__(self, "samples", samples)

    @classmethod
    def from_triples(
        cls, language: str, triples: Iterable[Tuple[str, str, str]]
    ) -> "SampleSet":
        """Build a set from ``(path, language, content)`` triples."""
        return cls(
            language=language,
            samples=tuple(SourceSample(path, lang, content) for path, lang, content in triples),
        )

    def select(self, language: str) -> "SampleSet":
        """Return the subset of samples tagged with ``language``."""
        return SampleSet(
            language=language,
            samples=tuple(sample for sample in self.samples if sample.language == language),
        )

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)


@dataclass(frozen=True)
class Observation:
    """A single recorded value for one feature kind from one sample."""

    kind: str
    value: str
    source: str


@dataclass(frozen=True)
class FrequencyTable:
    """Per-value occurrence counts for one feature kind."""

    kind: str
    counts: Mapping[str, int] = field(default_factory=dict)
    total: int = field(init=False)

    def __post_init__(self) -> None:
        ordered: Dict[str, int] = {}
        for value in sorted(self.counts):
            count = self.counts[value]
            if count < 0:
                raise ValueError(f"Negative count for {self.kind}={value}")
            if count:
                ordered[value] = count
        object.__setattr__(self, "counts", MappingProxyType(ordered))
        object.__setattr__(self, "total", sum(ordered.values()))

    @classmethod
    def empty(cls, kind: str) -> "FrequencyTable":
        return cls(kind=kind)

    def merge(self, other: "FrequencyTable") -> "FrequencyTable":
        """Sum counts with another table of the same kind."""
        if other.kind != self.kind:
            raise ValueError(f"Cannot merge '{other.kind}' table into '{self.kind}' table")
        combined = dict(self.counts)
        for value, count in other.counts.items():
            combined[value] = combined.get(value, 0) + count
        return FrequencyTable(kind=self.kind, counts=combined)


class Tier(str, Enum):
    """Confidence classification of a Decision."""

    DOMINANT = "dominant"
    AMBIGUOUS = "ambiguous"
    INCONSISTENT = "inconsistent"
    INSUFFICIENT_DATA = "insufficient-data"


@dataclass(frozen=True)
class Decision:
    """Outcome of deciding one frequency table.

    ``chosen_value`` is set only for the dominant tier and is the only value a
    caller may apply without asking. ``suggested_value`` carries the leading
    value of an untied ambiguous result for confirmation prompts.
    """

    kind: str
    tier: Tier
    confidence: float
    chosen_value: Optional[str] = None
    suggested_value: Optional[str] = None
    tied_values: Tuple[str, ...] = ()
    observations: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range: {self.confidence}")
        if (self.chosen_value is not None) != (self.tier is Tier.DOMINANT):
            raise ValueError("chosen_value must be set exactly when the tier is dominant")
        if self.suggested_value is not None and self.tier is not Tier.AMBIGUOUS:
            raise ValueError("suggested_value is only valid for the ambiguous tier")

    @property
    def is_dominant(self) -> bool:
        return self.tier is Tier.DOMINANT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "tier": self.tier.value,
            "confidence": self.confidence,
            "chosen_value": self.chosen_value,
            "suggested_value": self.suggested_value,
            "tied_values": list(self.tied_values),
            "observations": self.observations,
        }


class MissingDecisionError(LookupError):
    """Raised when a profile is built or queried for a kind that was never decided."""


@dataclass(frozen=True)
class StyleProfile:
    """Immutable report of every decision made in one analysis run."""

    language: str
    decisions: Mapping[str, Decision]
    sample_size: int
    complete: bool = True

    def __post_init__(self) -> None:
        ordered = {kind: self.decisions[kind] for kind in sorted(self.decisions)}
        object.__setattr__(self, "decisions", MappingProxyType(ordered))

    def decision(self, kind: str) -> Decision:
        try:
            return self.decisions[kind]
        except KeyError:
            raise MissingDecisionError(f"No decision recorded for feature kind '{kind}'") from None

    def dominant(self) -> Dict[str, str]:
        """Return the conventions that may be applied automatically."""
        return {
            kind: decision.chosen_value
            for kind, decision in self.decisions.items()
            if decision.chosen_value is not None
        }

    def unresolved(self) -> Tuple[Decision, ...]:
        """Return decisions a caller should surface to the user."""
        return tuple(
            decision
            for decision in self.decisions.values()
            if decision.tier in (Tier.AMBIGUOUS, Tier.INCONSISTENT)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "sample_size": self.sample_size,
            "complete": self.complete,
            "decisions": {kind: decision.to_dict() for kind, decision in self.decisions.items()},
        }


__all__ = [
    "Decision",
    "FrequencyTable",
    "MissingDecisionError",
    "Observation",
    "SampleSet",
    "SourceSample",
    "StyleProfile",
    "Tier",
]
