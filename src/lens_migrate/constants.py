"""Centralized constants for lens-migrate.

Identifiers, well-known setting keys, file names and logging defaults live
here so the config, migration and logger packages share one source.
"""

from typing import Final

# Version of the settings schema this build understands
HOST_VERSION: Final = "8.0.2"

# Settings document layout
SETTINGS_NAMESPACE: Final = "gitlens"
KEY_GIT_ENABLED: Final = "git.enabled"
KEY_OUTPUT_LEVEL: Final = "outputLevel"
KEY_SHOW_WHATS_NEW: Final = "showWhatsNewAfterUpgrades"

# Global state (memento) keys
STATE_KEY_VERSION: Final = "gitlensVersion"

# Upgrading exactly from this version always shows the welcome page
WELCOME_VERSION: Final = "8.0.0"

# File and directory names
CONFIG_DIR_NAME: Final = "lens-migrate"
DEFAULT_CONFIG_SUBDIR: Final = ".config"
SETTINGS_FILE_NAME: Final = "settings.json"
STATE_FILE_NAME: Final = "state.json"
LOG_FILE_NAME: Final = "lens-migrate.log"
LOG_DIR_ENV_VAR: Final = "LENS_MIGRATE_LOG_DIR"

# Logging
ROOT_LOGGER_NAME: Final = "lens_migrate"
DEFAULT_LOG_LEVEL: Final = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final = "WARNING"
LOG_ROTATION_THRESHOLD_BYTES: Final = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final = 5
LOG_CONSOLE_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_CONSOLE_DATE_FORMAT: Final = "%H:%M:%S"
LOG_FILE_FORMAT: Final = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final = "%Y-%m-%d %H:%M:%S"
LOG_COLORS: Final = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}

# outputLevel setting -> console log level
OUTPUT_LEVEL_TO_LOG_LEVEL: Final = {
    "silent": "CRITICAL",
    "errors": "ERROR",
    "verbose": "INFO",
    "debug": "DEBUG",
}
