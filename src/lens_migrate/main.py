"""Console entry point for lens-migrate."""

import sys

from lens_migrate.cli import CLIRunner
from lens_migrate.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the CLI and exit with its status code."""
    try:
        sys.exit(CLIRunner().run())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
