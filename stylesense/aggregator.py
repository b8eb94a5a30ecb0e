"""Fold observations into per-kind frequency tables."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .models import FrequencyTable, Observation


def aggregate(kind: str, observations: Iterable[Observation]) -> FrequencyTable:
    """Count observed values for ``kind``.

    ``total`` on the returned table counts observations, not samples, so
    samples that abstained contribute nothing.
    """
    counts: Counter[str] = Counter()
    for observation in observations:
        if observation.kind != kind:
            raise ValueError(
                f"Observation of kind '{observation.kind}' passed to '{kind}' aggregation"
            )
        counts[observation.value] += 1
    return FrequencyTable(kind=kind, counts=counts)


def merge_tables(kind: str, tables: Iterable[FrequencyTable]) -> FrequencyTable:
    """Combine partial tables computed over disjoint samples."""
    merged = FrequencyTable.empty(kind)
    for table in tables:
        merged = merged.merge(table)
    return merged


__all__ = ["aggregate", "merge_tables"]
