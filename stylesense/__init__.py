"""Infer a codebase's dominant formatting and naming conventions."""

from .aggregator import aggregate, merge_tables
from .analyzer import IncompleteAnalysisError, StyleAnalyzer, analyze_triples
from .decision import DEFAULT_POLICY, DecisionPolicy, decide
from .models import (
    Decision,
    FrequencyTable,
    MissingDecisionError,
    Observation,
    SampleSet,
    SourceSample,
    StyleProfile,
    Tier,
)
from .profile import build_profile

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_POLICY",
    "Decision",
    "DecisionPolicy",
    "FrequencyTable",
    "IncompleteAnalysisError",
    "MissingDecisionError",
    "Observation",
    "SampleSet",
    "SourceSample",
    "StyleAnalyzer",
    "StyleProfile",
    "Tier",
    "aggregate",
    "analyze_triples",
    "build_profile",
    "decide",
    "merge_tables",
]
