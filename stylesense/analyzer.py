"""Pipeline orchestration: samples to observations to decisions to a profile."""

from __future__ import annotations

import hashlib
import inspect
import json
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .aggregator import aggregate, merge_tables
from .decision import DEFAULT_POLICY, DecisionPolicy, decide
from .extractors import FeatureExtractor, discover_extractors, lexing
from .logging import get_logger
from .models import FrequencyTable, Observation, SampleSet, SourceSample, StyleProfile
from .profile import build_profile
from .stores import ExtractionCache

PartialTables = Dict[str, FrequencyTable]


class IncompleteAnalysisError(RuntimeError):
    """Raised when a run stopped early and the caller did not accept partial results."""


class StyleAnalyzer:
    """Runs extractors over a sample set and decides every requested feature kind."""

    def __init__(
        self,
        extractors: Optional[Union[Mapping[str, FeatureExtractor], Iterable[FeatureExtractor]]] = None,
        policy: DecisionPolicy | None = None,
        *,
        max_workers: int = 1,
        cache: ExtractionCache | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._extractor_overrides: Optional[Dict[str, FeatureExtractor]] = None
        if extractors is not None:
            items = extractors.values() if isinstance(extractors, Mapping) else extractors
            self._extractor_overrides = {extractor.kind: extractor for extractor in items}
        self.policy = policy or DEFAULT_POLICY
        self.max_workers = max_workers
        self.cache = cache
        self.logger = get_logger("analyzer")
        self._signatures: Dict[str, str] = {}

    def analyze(
        self,
        sample_set: SampleSet,
        kinds: Sequence[str] | None = None,
        *,
        stop_event: threading.Event | None = None,
        allow_partial: bool = False,
    ) -> StyleProfile:
        """Return the style profile for ``sample_set``.

        ``kinds`` limits the run to the given feature kinds. When
        ``stop_event`` is set mid-run the remaining samples are not started;
        the run then fails unless ``allow_partial`` is true, in which case the
        profile is marked incomplete and sized to the samples processed.
        """
        extractors = self._select_extractors(kinds)
        samples = self._eligible_samples(sample_set)
        self.logger.info(
            "Analyzing %d %s samples for %d feature kinds",
            len(samples),
            sample_set.language,
            len(extractors),
        )

        def _run(sample: SourceSample) -> Optional[PartialTables]:
            if stop_event is not None and stop_event.is_set():
                return None
            return self._extract_sample(sample, extractors)

        if self.max_workers > 1 and len(samples) > 1:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="stylesense-extract"
            ) as pool:
                partials = list(pool.map(_run, samples))
        else:
            partials = [_run(sample) for sample in samples]

        processed = [partial for partial in partials if partial is not None]
        skipped = len(partials) - len(processed)
        if skipped and not allow_partial:
            raise IncompleteAnalysisError(
                f"Analysis stopped after {len(processed)} of {len(samples)} samples"
            )

        decisions = {}
        for kind in extractors:
            table = merge_tables(kind, (partial[kind] for partial in processed))
            decisions[kind] = decide(table, self.policy)
            self.logger.debug(
                "%s: %s (%.2f over %d observations)",
                kind,
                decisions[kind].tier.value,
                decisions[kind].confidence,
                table.total,
            )

        if self.cache is not None:
            if kinds is None and not skipped:
                self.cache.prune(
                    (self._cache_key(extractor), sample.fingerprint)
                    for extractor in extractors.values()
                    for sample in samples
                )
            self.cache.persist()

        return build_profile(
            sample_set.language,
            decisions,
            len(processed),
            requested=extractors.keys(),
            complete=not skipped,
        )

    def _select_extractors(self, kinds: Sequence[str] | None) -> Dict[str, FeatureExtractor]:
        if self._extractor_overrides is None:
            return discover_extractors(kinds)
        if kinds is None:
            return dict(self._extractor_overrides)
        requested = [kind.lower() for kind in kinds]
        missing = sorted(set(requested) - set(self._extractor_overrides))
        if missing:
            raise ValueError(f"Unknown feature kinds requested: {', '.join(missing)}")
        return {kind: self._extractor_overrides[kind] for kind in requested}

    def _eligible_samples(self, sample_set: SampleSet) -> List[SourceSample]:
        eligible: List[SourceSample] = []
        for sample in sample_set.samples:
            if sample.language != sample_set.language:
                self.logger.debug(
                    "Skipping %s: language %s does not match %s",
                    sample.path,
                    sample.language,
                    sample_set.language,
                )
                continue
            eligible.append(sample)
        return eligible

    def _extract_sample(
        self, sample: SourceSample, extractors: Mapping[str, FeatureExtractor]
    ) -> PartialTables:
        tables: PartialTables = {}
        for kind, extractor in extractors.items():
            observations = self._observe(sample, extractor)
            tables[kind] = aggregate(kind, observations)
        return tables

    def _observe(self, sample: SourceSample, extractor: FeatureExtractor) -> List[Observation]:
        if self.cache is None:
            return extractor.extract(sample)
        key = self._cache_key(extractor)
        signature = self._signature(extractor)
        cached = self.cache.get(key, sample.fingerprint, signature=signature)
        if cached is not None:
            self.logger.debug("Using cached %s observations for %s", extractor.kind, sample.path)
            return [Observation(kind=extractor.kind, value=value, source=sample.path) for value in cached]
        observations = extractor.extract(sample)
        self.cache.store(
            key,
            sample.fingerprint,
            signature=signature,
            values=[observation.value for observation in observations],
        )
        return observations

    @staticmethod
    def _cache_key(extractor: FeatureExtractor) -> str:
        return f"{extractor.kind}:{extractor.__class__.__module__}.{extractor.__class__.__qualname__}"

    def _signature(self, extractor: FeatureExtractor) -> str:
        key = self._cache_key(extractor)
        if key not in self._signatures:
            self._signatures[key] = extractor_signature(extractor)
        return self._signatures[key]


def extractor_signature(extractor: FeatureExtractor) -> str:
    """Identify an extractor's code, cache version and parameters.

    The source of every module defining a class in the extractor's MRO is
    hashed, together with the shared lexer, so edits to module-level helpers
    invalidate cached observations as well.
    """
    cls = extractor.__class__
    digest = hashlib.sha256()
    for module_name in _signature_modules(cls):
        module = sys.modules.get(module_name)
        try:
            source = inspect.getsource(module)
        except (OSError, TypeError):
            source = module_name
        digest.update(module_name.encode("utf-8"))
        digest.update(source.encode("utf-8"))
    parameters = json.dumps(extractor.parameters(), sort_keys=True, default=str)
    return f"{cls.__module__}.{cls.__qualname__}:{extractor.cache_version}:{digest.hexdigest()}:{parameters}"


def _signature_modules(cls: type) -> List[str]:
    names = {klass.__module__ for klass in cls.__mro__ if klass.__module__ not in ("builtins", "abc")}
    names.add(lexing.__name__)
    return sorted(names)


def analyze_triples(
    language: str,
    triples: Iterable[Tuple[str, str, str]],
    kinds: Sequence[str] | None = None,
    policy: DecisionPolicy | None = None,
) -> StyleProfile:
    """Convenience wrapper for callers holding plain ``(path, language, content)`` triples."""
    return StyleAnalyzer(policy=policy).analyze(SampleSet.from_triples(language, triples), kinds)


__all__ = ["IncompleteAnalysisError", "StyleAnalyzer", "analyze_triples", "extractor_signature"]
