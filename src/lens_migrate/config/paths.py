"""Path constants for lens-migrate settings and state files.

Every path here is only a default: the CLI and ``HostContext`` accept
explicit locations, which is how the test suite stays out of ``$HOME``.
"""

from pathlib import Path

from lens_migrate.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    SETTINGS_FILE_NAME,
    STATE_FILE_NAME,
)


class Paths:
    """Application paths and directory structure."""

    # Base directories
    HOME_DIR = Path.home()
    CONFIG_BASE_DIR = HOME_DIR / DEFAULT_CONFIG_SUBDIR
    CONFIG_DIR = CONFIG_BASE_DIR / CONFIG_DIR_NAME

    # Files
    USER_SETTINGS_FILE = CONFIG_DIR / SETTINGS_FILE_NAME
    STATE_FILE = CONFIG_DIR / STATE_FILE_NAME
