"""Assemble decisions into a StyleProfile."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from .models import Decision, MissingDecisionError, StyleProfile


def build_profile(
    language: str,
    decisions: Mapping[str, Decision],
    sample_size: int,
    *,
    requested: Optional[Iterable[str]] = None,
    complete: bool = True,
) -> StyleProfile:
    """Return an immutable profile, failing fast on missing decisions."""
    for kind, decision in decisions.items():
        if decision.kind != kind:
            raise MissingDecisionError(
                f"Decision for '{decision.kind}' filed under feature kind '{kind}'"
            )

    if requested is not None:
        missing = sorted({kind for kind in requested if kind not in decisions})
        if missing:
            raise MissingDecisionError(
                f"No decision for requested feature kinds: {', '.join(missing)}"
            )

    if sample_size < 0:
        raise ValueError("sample_size cannot be negative")

    return StyleProfile(
        language=language,
        decisions=dict(decisions),
        sample_size=sample_size,
        complete=complete,
    )


__all__ = ["build_profile", "MissingDecisionError"]
