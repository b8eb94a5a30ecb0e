"""Tests for the FeatureExtractor contract."""

from __future__ import annotations

from typing import Optional

import pytest

from stylesense.extractors.base import ExtractorContractError, FeatureExtractor, majority
from stylesense.models import SourceSample


class FixedExtractor(FeatureExtractor):
    kind = "fixed"
    domain = frozenset({"yes", "no"})
    languages = frozenset({"Python"})

    def __init__(self, value: Optional[str]) -> None:
        self.value = value

    def observe(self, sample: SourceSample) -> Optional[str]:
        return self.value


class BrokenExtractor(FeatureExtractor):
    kind = "broken"
    domain = frozenset({"yes"})

    def observe(self, sample: SourceSample) -> Optional[str]:
        raise IndexError("unexpected layout")


SAMPLE = SourceSample(path="a.py", language="Python", content="x = 1\n")


def test_extract_wraps_value_in_observation() -> None:
    (observation,) = FixedExtractor("yes").extract(SAMPLE)
    assert observation.kind == "fixed"
    assert observation.value == "yes"
    assert observation.source == "a.py"


def test_none_means_abstain() -> None:
    assert FixedExtractor(None).extract(SAMPLE) == []


def test_unsupported_language_abstains() -> None:
    sample = SourceSample(path="a.go", language="Go", content="package main\n")
    assert FixedExtractor("yes").extract(sample) == []


def test_binary_content_abstains() -> None:
    sample = SourceSample(path="a.py", language="Python", content="x\x00y")
    assert FixedExtractor("yes").extract(sample) == []


def test_unreadable_layout_abstains() -> None:
    assert BrokenExtractor().extract(SAMPLE) == []


def test_value_outside_domain_is_a_contract_error() -> None:
    with pytest.raises(ExtractorContractError):
        FixedExtractor("maybe").extract(SAMPLE)


def test_majority() -> None:
    assert majority({"a": 3, "b": 1}) == "a"
    assert majority({"a": 2, "b": 2}) is None
    assert majority({"a": 0, "b": 0}) is None
    assert majority({}) is None
