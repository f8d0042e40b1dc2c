"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from codexup.core.models.options import InstallerContext, InstallerOptions, InstallerPaths
from codexup.core.observability.reporter import RecordingLogger
from codexup.core.services.installer.detection import tool_status


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep tests away from the developer's real settings and log config."""
    for var in ("CODEXUP_SETTINGS", "CODEXUP_LOG_LEVEL", "CODEXUP_LOG_FILE", "CODEXUP_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """A throwaway home directory; ``Path.home()`` points at it."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def paths(home: Path) -> InstallerPaths:
    return InstallerPaths(home_dir=home)


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_ctx(paths: InstallerPaths, recorder: RecordingLogger):
    """Factory for non-interactive installer contexts."""

    def _make(interactive: bool = False, **options) -> InstallerContext:
        return InstallerContext(
            options=InstallerOptions(**options),
            logger=recorder,
            paths=paths,
            interactive_override=interactive,
        )

    return _make


@pytest.fixture
def on_path(monkeypatch):
    """Control which binaries ``shutil.which`` finds.

    Returns the mutable set of present binary names.
    """
    present: set[str] = set()

    def _which(name, *args, **kwargs):
        return f"/usr/bin/{name}" if name in present else None

    monkeypatch.setattr(tool_status.shutil, "which", _which)
    return present
