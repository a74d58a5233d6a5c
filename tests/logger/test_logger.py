"""Tests for logger setup, flushing and cleanup."""

import logging
from pathlib import Path

import pytest

from lens_migrate.logger import (
    ConfigurationError,
    clear_logger_state,
    flush_all_handlers,
    get_state,
    setup_logging,
)
from lens_migrate.logger.handlers import _create_file_handler


@pytest.fixture
def fresh_logging():
    """Reset the logging system and restore the default setup afterwards."""
    clear_logger_state()
    yield
    clear_logger_state()
    setup_logging()


def test_setup_logging_writes_file(fresh_logging, tmp_path: Path) -> None:
    """Test records reach the rotating log file through the queue."""
    log_file = tmp_path / "logs" / "test.log"
    logger = setup_logging(
        "lens_migrate.test",
        console_level="CRITICAL",
        file_level="DEBUG",
        log_file=log_file,
    )

    logger.info("Migrated %d rules", 3)
    flush_all_handlers()

    assert "Migrated 3 rules" in log_file.read_text(encoding="utf-8")


def test_setup_logging_initializes_once(fresh_logging, tmp_path: Path) -> None:
    setup_logging(
        console_level="WARNING", file_level="INFO", log_file=tmp_path / "a.log"
    )
    listener = get_state().queue_listener

    setup_logging("lens_migrate.other")

    assert get_state().queue_listener is listener
    assert len(logging.getLogger("lens_migrate").handlers) == 1


def test_clear_logger_state(fresh_logging, tmp_path: Path) -> None:
    setup_logging(
        console_level="WARNING", file_level="INFO", log_file=tmp_path / "a.log"
    )

    clear_logger_state()

    state = get_state()
    assert state.queue_listener is None
    assert state.root_initialized is False
    assert logging.getLogger("lens_migrate").handlers == []


def test_file_handler_error(tmp_path: Path) -> None:
    """Test an unusable log location raises ConfigurationError."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        _create_file_handler(blocker / "test.log", "INFO")
