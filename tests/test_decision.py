"""Tests for stylesense.decision."""

from __future__ import annotations

import pytest

from stylesense.aggregator import aggregate
from stylesense.decision import DEFAULT_POLICY, DecisionPolicy, decide
from stylesense.models import FrequencyTable, Tier


def test_clear_majority_is_dominant() -> None:
    decision = decide(FrequencyTable("indentation", {"tab": 8, "space-4": 2}))
    assert decision.tier is Tier.DOMINANT
    assert decision.chosen_value == "tab"
    assert decision.confidence == pytest.approx(0.8)
    assert decision.observations == 10


def test_weak_majority_is_ambiguous_with_suggestion() -> None:
    decision = decide(FrequencyTable("quote-style", {"single": 6, "double": 4}))
    assert decision.tier is Tier.AMBIGUOUS
    assert decision.chosen_value is None
    assert decision.suggested_value == "single"
    assert decision.confidence == pytest.approx(0.6)


def test_fragmented_table_is_inconsistent() -> None:
    decision = decide(
        FrequencyTable("indentation", {"tab": 4, "space-2": 3, "space-4": 3})
    )
    assert decision.tier is Tier.INCONSISTENT
    assert decision.chosen_value is None
    assert decision.suggested_value is None
    assert decision.confidence == pytest.approx(0.4)


def test_empty_table_is_insufficient_data() -> None:
    decision = decide(FrequencyTable.empty("semicolon-usage"))
    assert decision.tier is Tier.INSUFFICIENT_DATA
    assert decision.confidence == 0.0
    assert decision.chosen_value is None
    assert decision.observations == 0


def test_even_split_is_ambiguous_without_a_value() -> None:
    decision = decide(FrequencyTable("quote-style", {"single": 5, "double": 5}))
    assert decision.tier is Tier.AMBIGUOUS
    assert decision.chosen_value is None
    assert decision.suggested_value is None
    assert decision.tied_values == ("double", "single")
    assert decision.confidence == pytest.approx(0.5)


def test_tie_outcome_does_not_depend_on_observation_order(make_observations) -> None:
    forward = make_observations("quote-style", ["single", "double"] * 3)
    backward = list(reversed(forward))
    first = decide(aggregate("quote-style", forward))
    second = decide(aggregate("quote-style", backward))
    assert first == second
    assert first.chosen_value is None


def test_tie_above_dominant_threshold_is_still_ambiguous() -> None:
    policy = DecisionPolicy(dominant_threshold=0.4, ambiguous_threshold=0.3)
    decision = decide(FrequencyTable("brace-style", {"same-line": 3, "next-line": 3}), policy)
    assert decision.tier is Tier.AMBIGUOUS
    assert decision.chosen_value is None


def test_uniform_table_has_full_confidence() -> None:
    decision = decide(FrequencyTable("line-ending", {"lf": 12}))
    assert decision.tier is Tier.DOMINANT
    assert decision.confidence == 1.0


def test_threshold_boundaries_are_inclusive() -> None:
    at_dominant = decide(FrequencyTable("quote-style", {"single": 7, "double": 3}))
    assert at_dominant.tier is Tier.DOMINANT

    at_ambiguous = decide(
        FrequencyTable("indentation", {"tab": 5, "space-2": 3, "space-4": 2})
    )
    assert at_ambiguous.tier is Tier.AMBIGUOUS
    assert at_ambiguous.suggested_value == "tab"


def test_just_below_dominant_threshold_is_ambiguous() -> None:
    decision = decide(FrequencyTable("quote-style", {"single": 69, "double": 31}))
    assert decision.tier is Tier.AMBIGUOUS


def test_abstentions_do_not_dilute_confidence(make_observations) -> None:
    # Eight samples that abstained contribute nothing; two agreeing samples decide.
    table = aggregate("semicolon-usage", make_observations("semicolon-usage", ["never", "never"]))
    decision = decide(table)
    assert decision.tier is Tier.DOMINANT
    assert decision.confidence == 1.0


def test_custom_policy_moves_the_bands() -> None:
    table = FrequencyTable("quote-style", {"single": 6, "double": 4})
    assert decide(table).tier is Tier.AMBIGUOUS
    strict = DecisionPolicy(dominant_threshold=0.9, ambiguous_threshold=0.65)
    assert decide(table, strict).tier is Tier.INCONSISTENT
    lenient = DecisionPolicy(dominant_threshold=0.6, ambiguous_threshold=0.5)
    assert decide(table, lenient).chosen_value == "single"


@pytest.mark.parametrize(
    ("dominant", "ambiguous"),
    [(0.5, 0.7), (0.0, 0.0), (1.2, 0.5), (0.7, -0.1)],
)
def test_policy_rejects_invalid_thresholds(dominant: float, ambiguous: float) -> None:
    with pytest.raises(ValueError):
        DecisionPolicy(dominant_threshold=dominant, ambiguous_threshold=ambiguous)


def test_default_policy_thresholds() -> None:
    assert DEFAULT_POLICY.dominant_threshold == 0.70
    assert DEFAULT_POLICY.ambiguous_threshold == 0.50


def test_decide_is_deterministic() -> None:
    table = FrequencyTable("indentation", {"tab": 3, "space-4": 2, "space-2": 2})
    assert decide(table) == decide(table)
