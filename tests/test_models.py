"""Tests for stylesense.models."""

from __future__ import annotations

import pytest

from stylesense.models import (
    Decision,
    FrequencyTable,
    MissingDecisionError,
    SampleSet,
    SourceSample,
    StyleProfile,
    Tier,
)


def test_sample_set_preserves_order_and_rejects_duplicates() -> None:
    samples = SampleSet.from_triples(
        "Python",
        [("b.py", "Python", "x = 1\n"), ("a.py", "Python", "y = 2\n")],
    )
    assert [sample.path for sample in samples] == ["b.py", "a.py"]
    assert len(samples) == 2

    with pytest.raises(ValueError):
        SampleSet.from_triples(
            "Python",
            [("a.py", "Python", ""), ("a.py", "Python", "")],
        )


def test_sample_set_select_filters_by_language() -> None:
    samples = SampleSet.from_triples(
        "Python",
        [("a.py", "Python", ""), ("b.js", "JavaScript", ""), ("c.py", "Python", "")],
    )
    selected = samples.select("Python")
    assert [sample.path for sample in selected] == ["a.py", "c.py"]
    assert selected.language == "Python"


def test_sample_fingerprint_depends_only_on_content() -> None:
    first = SourceSample("a.py", "Python", "print('hi')\n")
    second = SourceSample("b.py", "Python", "print('hi')\n")
    third = SourceSample("a.py", "Python", "print('bye')\n")
    assert first.fingerprint == second.fingerprint
    assert first.fingerprint != third.fingerprint


def test_frequency_table_totals_and_orders_counts() -> None:
    table = FrequencyTable("quote-style", {"single": 4, "double": 6, "unused": 0})
    assert table.total == 10
    assert list(table.counts) == ["double", "single"]
    with pytest.raises(TypeError):
        table.counts["single"] = 5  # type: ignore[index]


def test_frequency_table_merge_requires_same_kind() -> None:
    left = FrequencyTable("indentation", {"tab": 2})
    right = FrequencyTable("quote-style", {"single": 1})
    with pytest.raises(ValueError):
        left.merge(right)


def test_frequency_table_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        FrequencyTable("indentation", {"tab": -1})


def test_decision_chosen_value_only_when_dominant() -> None:
    with pytest.raises(ValueError):
        Decision("indentation", Tier.AMBIGUOUS, 0.6, chosen_value="tab")
    with pytest.raises(ValueError):
        Decision("indentation", Tier.DOMINANT, 0.9)
    with pytest.raises(ValueError):
        Decision("indentation", Tier.INCONSISTENT, 0.4, suggested_value="tab")


def test_style_profile_helpers() -> None:
    adopted = Decision("indentation", Tier.DOMINANT, 0.8, chosen_value="tab", observations=10)
    question = Decision("quote-style", Tier.AMBIGUOUS, 0.6, suggested_value="double", observations=10)
    empty = Decision("semicolon-usage", Tier.INSUFFICIENT_DATA, 0.0)
    profile = StyleProfile(
        language="JavaScript",
        decisions={"quote-style": question, "indentation": adopted, "semicolon-usage": empty},
        sample_size=10,
    )

    assert list(profile.decisions) == ["indentation", "quote-style", "semicolon-usage"]
    assert profile.dominant() == {"indentation": "tab"}
    assert profile.unresolved() == (question,)
    assert profile.decision("indentation") is adopted
    with pytest.raises(MissingDecisionError):
        profile.decision("brace-style")

    payload = profile.to_dict()
    assert payload["complete"] is True
    assert payload["decisions"]["quote-style"]["tier"] == "ambiguous"
    assert payload["decisions"]["quote-style"]["chosen_value"] is None
    assert payload["decisions"]["quote-style"]["suggested_value"] == "double"
