"""Configuration loading for stylesense (.stylesense.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .decision import DecisionPolicy

CONFIG_FILENAME = ".stylesense.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ThresholdConfig:
    """Tier thresholds; defaults match the documented 70% / 50% bands."""

    dominant: float = 0.70
    ambiguous: float = 0.50


@dataclass
class SamplingConfig:
    """Limits applied while loading samples from disk."""

    max_files: int = 200
    max_file_bytes: int = 256 * 1024
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class StyleConfig:
    """Represents the settings defined in .stylesense.yml."""

    root: Path
    language: Optional[str] = None
    features: List[str] = field(default_factory=list)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    line_length_percentile: Optional[float] = None
    workers: int = 1

    def policy(self) -> DecisionPolicy:
        try:
            return DecisionPolicy(
                dominant_threshold=self.thresholds.dominant,
                ambiguous_threshold=self.thresholds.ambiguous,
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    def extractor_options(self) -> Dict[str, Dict[str, object]]:
        options: Dict[str, Dict[str, object]] = {}
        if self.line_length_percentile is not None:
            options["line-length-percentile"] = {"percentile": self.line_length_percentile}
        return options


def load_config(config_path: Path) -> StyleConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return StyleConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    thresholds = ThresholdConfig()
    threshold_data = _as_dict(data.get("thresholds"))
    if threshold_data:
        dominant = _as_float(threshold_data.get("dominant"))
        ambiguous = _as_float(threshold_data.get("ambiguous"))
        if dominant is not None:
            thresholds.dominant = dominant
        if ambiguous is not None:
            thresholds.ambiguous = ambiguous

    sampling = SamplingConfig()
    sampling_data = _as_dict(data.get("sampling"))
    if sampling_data:
        max_files = _as_int(sampling_data.get("max_files"))
        max_file_bytes = _as_int(sampling_data.get("max_file_bytes"))
        if max_files is not None:
            sampling.max_files = max_files
        if max_file_bytes is not None:
            sampling.max_file_bytes = max_file_bytes
        sampling.exclude_paths = _as_str_list(sampling_data.get("exclude_paths"))

    line_length_data = _as_dict(data.get("line_length"))
    percentile = _as_float(line_length_data.get("percentile")) if line_length_data else None

    workers = _as_int(data.get("workers"))
    if workers is not None and workers < 1:
        raise ConfigError("workers must be a positive integer")

    config = StyleConfig(
        root=root,
        language=_as_str(data.get("language")),
        features=_as_str_list(data.get("features")),
        thresholds=thresholds,
        sampling=sampling,
        line_length_percentile=percentile,
        workers=workers or 1,
    )
    config.policy()
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "SamplingConfig",
    "StyleConfig",
    "ThresholdConfig",
    "load_config",
]
