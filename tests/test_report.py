"""Tests for stylesense.report."""

from __future__ import annotations

import json

from stylesense.decision import decide
from stylesense.models import FrequencyTable
from stylesense.profile import build_profile
from stylesense.report import render_json, render_text


def _profile(complete: bool = True):
    tables = [
        FrequencyTable("indentation", {"tab": 8, "space-4": 2}),
        FrequencyTable("quote-style", {"single": 5, "double": 5}),
        FrequencyTable("brace-style", {"same-line": 6, "next-line": 4}),
        FrequencyTable("trailing-comma", {"always": 4, "never": 3, "unused": 3}),
        FrequencyTable.empty("semicolon-usage"),
    ]
    decisions = {table.kind: decide(table) for table in tables}
    return build_profile("JavaScript", decisions, 10, complete=complete)


def test_render_text_groups_decisions() -> None:
    text = render_text(_profile())
    lines = text.splitlines()

    assert lines[0] == "Style profile for JavaScript (10 samples)"
    assert "Adopted conventions:" in lines
    assert any(line.split() == ["indentation", "tab", "(80%)"] for line in lines)
    assert "Needs confirmation:" in lines
    assert any(line.split() == ["brace-style", "same-line?", "(60%)"] for line in lines)
    assert any("tie between double, single (50% each)" in line for line in lines)
    assert any("trailing-comma" in line and "inconsistent" in line for line in lines)
    assert lines[-1] == "Not enough data: semicolon-usage"
    assert text.endswith("\n")


def test_render_text_without_adopted_conventions() -> None:
    decisions = {"semicolon-usage": decide(FrequencyTable.empty("semicolon-usage"))}
    text = render_text(build_profile("Python", decisions, 1, complete=False))
    assert text.splitlines()[0] == "Style profile for Python (1 sample, partial run)"
    assert "Adopted conventions: none" in text
    assert "Needs confirmation:" not in text


def test_render_json_matches_profile_dict() -> None:
    profile = _profile()
    payload = json.loads(render_json(profile))
    assert payload == profile.to_dict()
    assert payload["decisions"]["indentation"]["chosen_value"] == "tab"
    assert payload["decisions"]["quote-style"]["tied_values"] == ["double", "single"]
