from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep LARAHOOKS_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.startswith("LARAHOOKS_"):
            monkeypatch.delenv(key, raising=False)
