"""Console formatters.

INFO lines are user-facing progress messages and print bare; everything
else keeps timestamp, logger name and a coloured level.
"""

import logging

from lens_migrate.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colour codes."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelname not in LOG_COLORS:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = (
            f"{LOG_COLORS[original_levelname]}{original_levelname}"
            f"{LOG_COLORS['RESET']}"
        )
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class HybridConsoleFormatter(logging.Formatter):
    """Bare message for INFO, coloured structured line for other levels.

    Example Output:
        INFO:     "Migrated 4 settings from v7.5.9"
        WARNING:  "12:30:45 - lens_migrate.migration.engine - WARNING - ..."

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return self._colored_formatter.format(record)
