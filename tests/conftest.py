from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from stylesense.models import Observation
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def make_observations() -> Callable[[str, Sequence[str]], list[Observation]]:
    """Build one observation per value, each from its own file."""

    def _make(kind: str, values: Sequence[str]) -> list[Observation]:
        return [
            Observation(kind=kind, value=value, source=f"src/file_{index}.py")
            for index, value in enumerate(values)
        ]

    return _make
