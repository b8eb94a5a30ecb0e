"""Persistent cache for per-sample extractor results."""

from __future__ import annotations

import json
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple

_CACHE_VERSION = 1


class ExtractionCache:
    """Stores observed values keyed by extractor identity and sample fingerprint.

    A cached entry is only reused when the extractor signature still matches,
    so editing an extractor or changing its parameters invalidates its entries.
    An empty value list is a cached abstention, distinct from a miss.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        self._lock = threading.Lock()
        if self._path is not None:
            self._load(self._path)

    def get(self, extractor: str, fingerprint: str, *, signature: str) -> Optional[Tuple[str, ...]]:
        with self._lock:
            entry = self._entries.get(_entry_key(extractor, fingerprint))
        if not entry or entry.get("signature") != signature:
            return None
        values = entry.get("values")
        if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
            return None
        return tuple(values)

    def store(
        self,
        extractor: str,
        fingerprint: str,
        *,
        signature: str,
        values: Sequence[str],
    ) -> None:
        entry = {
            "signature": signature,
            "values": list(values),
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        with self._lock:
            self._entries[_entry_key(extractor, fingerprint)] = entry
            self._dirty = True

    def prune(self, keep: Iterable[Tuple[str, str]]) -> None:
        """Drop entries whose ``(extractor, fingerprint)`` pair is not in ``keep``."""
        wanted = {_entry_key(extractor, fingerprint) for extractor, fingerprint in keep}
        with self._lock:
            removed = [key for key in self._entries if key not in wanted]
            for key in removed:
                self._entries.pop(key, None)
            if removed:
                self._dirty = True

    def persist(self) -> None:
        with self._lock:
            if not self._dirty or self._path is None:
                return
            payload = {
                "version": _CACHE_VERSION,
                "entries": self._entries,
            }
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
            )
            self._dirty = False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._dirty = True

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str) and isinstance(raw, dict) and "signature" in raw and "values" in raw
        }
        self._dirty = False


def _entry_key(extractor: str, fingerprint: str) -> str:
    return f"{extractor}@{fingerprint}"


__all__ = ["ExtractionCache"]
