"""Classify frequency tables into confidence tiers."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from .models import Decision, FrequencyTable, Tier


@dataclass(frozen=True)
class DecisionPolicy:
    """Adoption thresholds, expressed as a share of non-abstaining observations."""

    dominant_threshold: float = 0.70
    ambiguous_threshold: float = 0.50

    def __post_init__(self) -> None:
        if not 0 < self.ambiguous_threshold <= self.dominant_threshold <= 1:
            raise ValueError(
                "Thresholds must satisfy 0 < ambiguous <= dominant <= 1 "
                f"(got ambiguous={self.ambiguous_threshold}, dominant={self.dominant_threshold})"
            )


DEFAULT_POLICY = DecisionPolicy()


def decide(table: FrequencyTable, policy: DecisionPolicy = DEFAULT_POLICY) -> Decision:
    """Turn a frequency table into a Decision."""
    if table.total == 0:
        return Decision(kind=table.kind, tier=Tier.INSUFFICIENT_DATA, confidence=0.0)

    top = max(table.counts.values())
    leaders = tuple(sorted(value for value, count in table.counts.items() if count == top))
    share = Fraction(top, table.total)
    confidence = float(share)

    if len(leaders) > 1:
        return Decision(
            kind=table.kind,
            tier=Tier.AMBIGUOUS,
            confidence=confidence,
            tied_values=leaders,
            observations=table.total,
        )

    leader = leaders[0]
    if share >= _exact(policy.dominant_threshold):
        return Decision(
            kind=table.kind,
            tier=Tier.DOMINANT,
            confidence=confidence,
            chosen_value=leader,
            observations=table.total,
        )
    if share >= _exact(policy.ambiguous_threshold):
        return Decision(
            kind=table.kind,
            tier=Tier.AMBIGUOUS,
            confidence=confidence,
            suggested_value=leader,
            observations=table.total,
        )
    return Decision(
        kind=table.kind,
        tier=Tier.INCONSISTENT,
        confidence=confidence,
        observations=table.total,
    )


def _exact(threshold: float) -> Fraction:
    # 0.7 written in config should mean seven tenths, not the nearest binary float.
    return Fraction(str(threshold))


__all__ = ["DEFAULT_POLICY", "DecisionPolicy", "decide"]
