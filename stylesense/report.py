"""Text and JSON summaries of a StyleProfile."""

from __future__ import annotations

import json

from jinja2 import Environment, StrictUndefined

from .models import StyleProfile, Tier

_TEXT_TEMPLATE = """\
Style profile for {{ profile.language }} ({{ profile.sample_size }} sample{{ "" if profile.sample_size == 1 else "s" }}{{ ", partial run" if not profile.complete else "" }})

{% if adopted %}
Adopted conventions:
{% for decision in adopted %}
  {{ "%-24s"|format(decision.kind) }} {{ decision.chosen_value }} ({{ decision.confidence|percent }})
{% endfor %}
{% else %}
Adopted conventions: none
{% endif %}
{% if questions %}

Needs confirmation:
{% for decision in questions %}
{% if decision.tied_values %}
  {{ "%-24s"|format(decision.kind) }} tie between {{ decision.tied_values|join(", ") }} ({{ decision.confidence|percent }} each)
{% elif decision.suggested_value %}
  {{ "%-24s"|format(decision.kind) }} {{ decision.suggested_value }}? ({{ decision.confidence|percent }})
{% else %}
  {{ "%-24s"|format(decision.kind) }} inconsistent, no value above {{ decision.confidence|percent }}
{% endif %}
{% endfor %}
{% endif %}
{% if missing %}

Not enough data: {{ missing|join(", ") }}
{% endif %}
"""


def _percent(value: float) -> str:
    return f"{value * 100:.0f}%"


_environment = Environment(
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    autoescape=False,
)
_environment.filters["percent"] = _percent
_template = _environment.from_string(_TEXT_TEMPLATE)


def render_text(profile: StyleProfile) -> str:
    """Render a terminal summary grouping decisions by what the caller should do."""
    decisions = list(profile.decisions.values())
    return _template.render(
        profile=profile,
        adopted=[decision for decision in decisions if decision.tier is Tier.DOMINANT],
        questions=list(profile.unresolved()),
        missing=[decision.kind for decision in decisions if decision.tier is Tier.INSUFFICIENT_DATA],
    )


def render_json(profile: StyleProfile) -> str:
    return json.dumps(profile.to_dict(), indent=2, sort_keys=True)


__all__ = ["render_json", "render_text"]
