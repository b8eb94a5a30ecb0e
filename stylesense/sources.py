"""Read a directory tree into a SampleSet."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from .logging import get_logger
from .models import SampleSet, SourceSample

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "bower_components",
    "vendor",
    "third_party",
    "dist",
    "build",
    "target",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".tox",
    ".idea",
    ".stylesense",
}

_GENERATED_MARKERS = (".min.", ".generated.", ".pb.", "_pb2.")

_LANGUAGE_BY_SUFFIX = {
    ".py": "Python",
    ".pyi": "Python",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".go": "Go",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".hpp": "C++",
    ".cc": "C++",
    ".hh": "C++",
    ".swift": "Swift",
    ".scala": "Scala",
    ".dart": "Dart",
    ".sh": "Shell",
}


@dataclass
class IgnoreRule:
    """A single .gitignore-style pattern."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored or "/" in self.pattern:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def parse_ignore_pattern(pattern: str) -> Optional[IgnoreRule]:
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return None
    negate = pattern.startswith("!")
    if negate:
        pattern = pattern[1:]
    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")
    if not pattern:
        return None
    return IgnoreRule(pattern=pattern, directory_only=directory_only, anchored=anchored, negate=negate)


def _load_ignore_rules(root: Path, extra: Sequence[str]) -> List[IgnoreRule]:
    patterns: List[str] = []
    gitignore = root / ".gitignore"
    if gitignore.exists():
        patterns.extend(gitignore.read_text(encoding="utf-8", errors="replace").splitlines())
    patterns.extend(extra)
    return [rule for rule in map(parse_ignore_pattern, patterns) if rule is not None]


def _is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def detect_language(path: Path) -> Optional[str]:
    return _LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


class SampleLoader:
    """Walks a repository and loads source files as samples.

    Vendored, generated, binary and oversize files are filtered out here so
    the analysis core only ever sees plain source text.
    """

    def __init__(self) -> None:
        self.logger = get_logger("sources")

    def load(
        self,
        root: str | Path,
        language: Optional[str] = None,
        *,
        max_files: int = 200,
        max_file_bytes: int = 256 * 1024,
        exclude_paths: Sequence[str] = (),
    ) -> SampleSet:
        """Return a SampleSet for ``language`` (default: the most common one found)."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Repository path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {root}")

        rules = _load_ignore_rules(root_path, exclude_paths)
        candidates = sorted(self._candidates(root_path, rules), key=lambda item: item[0])

        if language is None:
            counts = Counter(lang for _, lang, _ in candidates)
            if not counts:
                return SampleSet(language="unknown")
            language = counts.most_common(1)[0][0]
            self.logger.info("Detected %s as the primary language", language)

        samples: List[SourceSample] = []
        for rel_path, lang, path in candidates:
            if lang != language:
                continue
            if len(samples) >= max_files:
                self.logger.debug("Sample cap of %d reached; ignoring remaining files", max_files)
                break
            content = self._read(path, max_file_bytes)
            if content is None:
                continue
            samples.append(SourceSample(path=rel_path, language=lang, content=content))

        self.logger.info("Loaded %d %s samples from %s", len(samples), language, root_path)
        return SampleSet(language=language, samples=tuple(samples))

    def _candidates(self, root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Tuple[str, str, Path]]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root).as_posix() if current != root else ""

            kept = []
            for name in dirnames:
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name in _EXCLUDED_DIRS or _is_ignored(rel_path, True, rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in filenames:
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if any(marker in filename for marker in _GENERATED_MARKERS):
                    continue
                if _is_ignored(rel_path, False, rules):
                    continue
                path = current / filename
                lang = detect_language(path)
                if lang is not None:
                    yield rel_path, lang, path

    def _read(self, path: Path, max_file_bytes: int) -> Optional[str]:
        try:
            if path.stat().st_size > max_file_bytes:
                self.logger.debug("Skipping %s: larger than %d bytes", path, max_file_bytes)
                return None
            data = path.read_bytes()
        except OSError as exc:
            self.logger.debug("Skipping %s: %s", path, exc)
            return None
        if b"\x00" in data:
            self.logger.debug("Skipping %s: binary content", path)
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            self.logger.debug("Skipping %s: not valid UTF-8", path)
            return None


__all__ = ["IgnoreRule", "SampleLoader", "detect_language", "parse_ignore_pattern"]
