"""Log settings: bootstrap defaults and the ``outputLevel`` setting.

Loggers are created at import time, before any settings file is read, so
setup starts from hardcoded defaults. Once startup has a settings store it
calls ``apply_output_level`` with the user's ``outputLevel``.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from lens_migrate.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
    OUTPUT_LEVEL_TO_LOG_LEVEL,
)

if TYPE_CHECKING:
    from lens_migrate.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        LENS_MIGRATE_LOG_DIR: Directory for the log file. The test suite
        sets it so test runs never write into ``~/.config``.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_dir = Path(env_log_dir).expanduser()
    else:
        log_dir = Path.home() / DEFAULT_CONFIG_SUBDIR / CONFIG_DIR_NAME / "logs"

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_dir / LOG_FILE_NAME


def resolve_output_level(output_level: str | None) -> str | None:
    """Map an ``outputLevel`` setting value to a logging level name.

    Returns:
        Level name, or None for unknown values

    """
    if not isinstance(output_level, str):
        return None
    return OUTPUT_LEVEL_TO_LOG_LEVEL.get(output_level.lower())


def apply_output_level(state: "_LoggerState", output_level: str | None) -> bool:
    """Set handler levels from the ``outputLevel`` setting.

    The console follows the setting; the file handler only drops to DEBUG
    when the setting asks for debug output. Handlers are never added or
    removed here.

    Args:
        state: Logger state object (from logger.state module)
        output_level: ``silent``, ``errors``, ``verbose`` or ``debug``

    Returns:
        True if the level was recognised and applied

    """
    level_name = resolve_output_level(output_level)
    if level_name is None:
        return False

    console_level = getattr(logging, level_name)
    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                if level_name == "DEBUG":
                    handler.setLevel(logging.DEBUG)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.output_level = output_level
    return True
