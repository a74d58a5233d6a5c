"""Command-line interface for lens-migrate."""

from lens_migrate.cli.parser import CLIParser
from lens_migrate.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
