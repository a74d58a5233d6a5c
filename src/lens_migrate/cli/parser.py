"""CLI argument parser for lens-migrate.

The CLI plays the host: it points the activation sequence at settings and
state files on disk and runs it, or reports what an activation would do.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from lens_migrate.constants import HOST_VERSION


class CLIParser:
    """Command-line argument parser for lens-migrate."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to ``sys.argv[1:]``)

        Returns:
            Parsed arguments namespace

        """
        parser = self.create_parser()
        return parser.parse_args(argv)

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="lens-migrate",
            description="Migrate extension settings to the current schema",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Run the startup sequence against the default settings files
  %(prog)s activate

  # Migrate a workspace as well, pretending to be a given release
  %(prog)s activate --workspace-settings .vscode/settings.json \\
      --current-version 8.0.2

  # Show the recorded marker and the batches an activation would apply
  %(prog)s status
            """,
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show lens-migrate version and exit",
        )

        subparsers = parser.add_subparsers(dest="command")
        activate = subparsers.add_parser(
            "activate", help="Run the activation sequence"
        )
        status = subparsers.add_parser(
            "status", help="Show the version marker and pending migrations"
        )
        for subparser in (activate, status):
            self._add_location_options(subparser)
        return parser

    def _add_location_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--user-settings",
            type=Path,
            help="User settings file (default: ~/.config/lens-migrate/settings.json)",
        )
        parser.add_argument(
            "--workspace-settings",
            type=Path,
            help="Workspace settings file (default: none)",
        )
        parser.add_argument(
            "--state",
            type=Path,
            help="Global state file (default: ~/.config/lens-migrate/state.json)",
        )
        parser.add_argument(
            "--current-version",
            default=HOST_VERSION,
            help="Version to migrate to and record (default: %(default)s)",
        )
