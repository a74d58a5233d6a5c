"""Public logging API: setup, lookup, flushing and test cleanup."""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from lens_migrate.constants import ROOT_LOGGER_NAME
from lens_migrate.logger.config import load_log_settings
from lens_migrate.logger.handlers import setup_root_logger
from lens_migrate.logger.state import get_state


def flush_all_handlers() -> None:
    """Wait for queued records and flush every listener handler.

    Records may already be dequeued but not yet written, so after the queue
    drains the listener thread gets a short grace period before flushing.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    timeout = 5.0
    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > timeout:
            break
        time.sleep(0.01)

    time.sleep(0.1)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the root logger once and return the named logger.

    Child loggers (``lens_migrate.migration.engine``) carry no handlers of
    their own and propagate to the root.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level (default WARNING)
        file_level: File log level (default INFO)
        log_file: Log file path (default from ``load_log_settings``)
        enable_file_logging: Whether to attach the rotating file handler

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            if console_level is None or file_level is None or log_file is None:
                cfg_console, cfg_file, cfg_path = load_log_settings()
                console_level = console_level or cfg_console
                file_level = file_level or cfg_file
                log_file = log_file or cfg_path

            setup_root_logger(
                state,
                console_level,
                file_level,
                log_file,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get a logger, initializing the logging system on first use.

    Example:
        >>> from lens_migrate.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Migrating settings from v%s", previous)

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def clear_logger_state() -> None:
    """Stop the listener, drop handlers and reset state (tests only)."""
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.output_level = None

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(ROOT_LOGGER_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
