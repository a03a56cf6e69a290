"""
Pytest config.

Pins the repo root on sys.path so `import analyzer` and `import main` work whether or not the
project was installed (e.g. when invoking a global `pytest` entrypoint).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture
def store():
    from analyzer.core.store import ResultStore

    return ResultStore()


class RecordingProbe:
    """Test double: runs an arbitrary callable against the store."""

    def __init__(self, name, store, action=None) -> None:  # type: ignore[no-untyped-def]
        self.name = name
        self.store = store
        self.action = action
        self.calls: List[str] = []

    def run(self) -> None:
        self.calls.append(self.name)
        if self.action is not None:
            self.action(self)


@pytest.fixture
def recording_probe():
    return RecordingProbe
