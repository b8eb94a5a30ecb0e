"""Feature extractor implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Set

from .base import ExtractorContractError, FeatureExtractor
from .braces import BraceStyleExtractor
from .indentation import (
    IndentationCharacterExtractor,
    IndentationExtractor,
    IndentationWidthExtractor,
)
from .line_endings import LineEndingExtractor
from .line_length import LineLengthExtractor
from .naming import (
    ConstantNamingExtractor,
    FunctionNamingExtractor,
    TypeNamingExtractor,
    VariableNamingExtractor,
)
from .quotes import QuoteStyleExtractor
from .semicolons import SemicolonExtractor
from .trailing_commas import TrailingCommaExtractor

_ENTRY_POINT_GROUP = "stylesense.extractors"

_BUILTIN_FACTORIES: Dict[str, Callable[..., FeatureExtractor]] = {
    IndentationExtractor.kind: IndentationExtractor,
    IndentationCharacterExtractor.kind: IndentationCharacterExtractor,
    IndentationWidthExtractor.kind: IndentationWidthExtractor,
    QuoteStyleExtractor.kind: QuoteStyleExtractor,
    SemicolonExtractor.kind: SemicolonExtractor,
    BraceStyleExtractor.kind: BraceStyleExtractor,
    VariableNamingExtractor.kind: VariableNamingExtractor,
    FunctionNamingExtractor.kind: FunctionNamingExtractor,
    TypeNamingExtractor.kind: TypeNamingExtractor,
    ConstantNamingExtractor.kind: ConstantNamingExtractor,
    LineLengthExtractor.kind: LineLengthExtractor,
    TrailingCommaExtractor.kind: TrailingCommaExtractor,
    LineEndingExtractor.kind: LineEndingExtractor,
}


def discover_extractors(
    kinds: Sequence[str] | None = None,
    options: Optional[Mapping[str, Mapping[str, object]]] = None,
) -> Dict[str, FeatureExtractor]:
    """Return instantiated extractors keyed by feature kind.

    ``kinds`` restricts the result to the requested feature kinds; ``options``
    maps a kind to keyword arguments for its factory.
    """

    requested: Set[str] | None = None
    if kinds is not None:
        requested = {kind.lower() for kind in kinds}
    options = options or {}

    extractors: Dict[str, FeatureExtractor] = {}

    def _add(kind: str, factory: Callable[..., FeatureExtractor]) -> None:
        key = kind.lower()
        if requested is not None and key not in requested:
            return
        if key in extractors:
            return
        instance = factory(**dict(options.get(key, {})))
        if not isinstance(instance, FeatureExtractor):
            raise TypeError(f"Extractor factory for '{kind}' did not return a FeatureExtractor instance")
        if instance.kind != key:
            raise TypeError(
                f"Extractor registered as '{kind}' reports feature kind '{instance.kind}'"
            )
        extractors[key] = instance

    for kind, factory in _BUILTIN_FACTORIES.items():
        _add(kind, factory)

    for entry in _iter_entry_points():
        name = entry.name
        if requested is not None and name.lower() not in requested:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Failed to load extractor entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded, **kwargs: object) -> FeatureExtractor:
            return _coerce_extractor(obj, kwargs)

        _add(name, _factory)

    if requested is not None:
        missing = requested - set(extractors)
        if missing:
            raise ValueError(f"Unknown feature kinds requested: {', '.join(sorted(missing))}")

    return extractors


def _coerce_extractor(obj: object, kwargs: Mapping[str, object]) -> FeatureExtractor:
    if isinstance(obj, FeatureExtractor):
        return obj
    if isinstance(obj, type) and issubclass(obj, FeatureExtractor):
        return obj(**kwargs)
    if callable(obj):
        instance = obj(**kwargs)
        if isinstance(instance, FeatureExtractor):
            return instance
    raise TypeError("Extractor entry point must be a FeatureExtractor subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    try:
        entry_points = metadata.entry_points()
    except Exception:  # pragma: no cover
        return []

    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]

    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "ExtractorContractError",
    "FeatureExtractor",
    "discover_extractors",
]
