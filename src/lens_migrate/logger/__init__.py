"""Logging utilities for lens-migrate.

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener thread
                                                 |
                                      Console + rotating file handlers

Usage:
    >>> from lens_migrate.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Applied %d rules", count)  # %-style, never f-strings

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers are attached only to the root 'lens_migrate' logger
"""

from lens_migrate.logger.config import apply_output_level as _apply_output_level
from lens_migrate.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from lens_migrate.logger.handlers import ConfigurationError
from lens_migrate.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from lens_migrate.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "apply_output_level",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
]


def apply_output_level(output_level: str | None) -> bool:
    """Apply the ``outputLevel`` setting to the global logger state.

    Example:
        >>> apply_output_level(settings.get("outputLevel"))

    """
    return _apply_output_level(get_state(), output_level)
