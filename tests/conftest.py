from __future__ import annotations

from pathlib import Path

import pytest

from projdigest.logging import reset_logging
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture(autouse=True)
def isolated_history(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the recent-paths history out of the real home directory."""
    home = tmp_path / "projdigest-home"
    monkeypatch.setenv("PROJDIGEST_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_projdigest_logger():
    """Drop handlers installed by the CLI so later tests don't log to closed streams."""
    yield
    reset_logging()
