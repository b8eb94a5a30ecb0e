"""Tests for extractor discovery utilities."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest

from stylesense.extractors import FeatureExtractor, discover_extractors
from stylesense.extractors.indentation import IndentationExtractor
from stylesense.extractors.line_length import LineLengthExtractor
from stylesense.models import SourceSample


class DummyExtractor(FeatureExtractor):
    """Test extractor used for plugin discovery validation."""

    kind = "dummy-kind"
    domain = frozenset({"on"})

    def observe(self, sample: SourceSample) -> Optional[str]:  # pragma: no cover - unused
        return "on"


def _patch_entry_points(monkeypatch, entries) -> None:
    class DummyEntryPoints(list):
        def select(self, **kwargs):
            if kwargs.get("group") == "stylesense.extractors":
                return self
            return []

    monkeypatch.setattr(
        "stylesense.extractors.metadata.entry_points",
        lambda: DummyEntryPoints(entries),
        raising=False,
    )


def test_discover_extractors_returns_builtin_extractors() -> None:
    extractors = discover_extractors()
    assert {
        "indentation",
        "indentation-character",
        "indentation-width",
        "quote-style",
        "semicolon-usage",
        "brace-style",
        "naming-variable",
        "naming-function",
        "naming-type",
        "naming-constant",
        "line-length-percentile",
        "trailing-comma",
        "line-ending",
    } <= set(extractors)
    for kind, extractor in extractors.items():
        assert extractor.kind == kind


def test_discover_extractors_respects_requested_kinds() -> None:
    extractors = discover_extractors(["Indentation"])
    assert list(extractors) == ["indentation"]
    assert isinstance(extractors["indentation"], IndentationExtractor)


def test_discover_extractors_passes_options() -> None:
    extractors = discover_extractors(
        ["line-length-percentile"],
        {"line-length-percentile": {"percentile": 50}},
    )
    extractor = extractors["line-length-percentile"]
    assert isinstance(extractor, LineLengthExtractor)
    assert extractor.percentile == 50


def test_discover_extractors_loads_entry_points(monkeypatch) -> None:
    _patch_entry_points(monkeypatch, [SimpleNamespace(name="dummy-kind", load=lambda: DummyExtractor)])

    extractors = discover_extractors(["dummy-kind"])
    assert isinstance(extractors["dummy-kind"], DummyExtractor)


def test_builtin_registration_wins_over_entry_point(monkeypatch) -> None:
    _patch_entry_points(monkeypatch, [SimpleNamespace(name="indentation", load=lambda: DummyExtractor)])

    extractors = discover_extractors(["indentation"])
    assert isinstance(extractors["indentation"], IndentationExtractor)


def test_entry_point_with_mismatched_kind_is_rejected(monkeypatch) -> None:
    _patch_entry_points(monkeypatch, [SimpleNamespace(name="other-kind", load=lambda: DummyExtractor)])

    with pytest.raises(TypeError):
        discover_extractors(["other-kind"])


def test_discover_extractors_raises_for_unknown_kind() -> None:
    with pytest.raises(ValueError):
        discover_extractors(["does-not-exist"])
