"""Persistent stores used by the analysis pipeline."""

from .extraction_cache import ExtractionCache

__all__ = ["ExtractionCache"]
