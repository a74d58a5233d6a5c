"""Pytest configuration and fixtures for lens-migrate tests."""

import logging
import os
import tempfile
from pathlib import Path

import pytest

# Keep test logs out of ~/.config before any lens_migrate module is imported
os.environ.setdefault(
    "LENS_MIGRATE_LOG_DIR",
    str(Path(tempfile.gettempdir()) / "pytest-lens-migrate-logs"),
)

from lens_migrate.config.state import GlobalState  # noqa: E402
from lens_migrate.config.store import SettingsStore  # noqa: E402


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation so caplog sees lens_migrate records."""
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("lens_migrate"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture
def store() -> SettingsStore:
    """Memory-only settings store with schema defaults."""
    return SettingsStore.from_documents()


@pytest.fixture
def file_store(tmp_path: Path) -> SettingsStore:
    """Settings store backed by user and workspace files in tmp_path."""
    return SettingsStore(
        user_file=tmp_path / "user" / "settings.json",
        workspace_file=tmp_path / "workspace" / ".vscode" / "settings.json",
    )


@pytest.fixture
def state(tmp_path: Path) -> GlobalState:
    """Global state backed by a file in tmp_path."""
    return GlobalState(tmp_path / "state.json")
