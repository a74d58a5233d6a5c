"""CLI runner for lens-migrate.

Routes parsed arguments to the activate and status commands and turns
their results into console output and an exit code.
"""

from argparse import Namespace
from collections.abc import Sequence

from lens_migrate import __version__
from lens_migrate.cli.parser import CLIParser
from lens_migrate.config.paths import Paths
from lens_migrate.config.state import GlobalState
from lens_migrate.config.store import SettingsStore
from lens_migrate.domain.version import SemVer
from lens_migrate.exceptions import LensMigrateError
from lens_migrate.logger import get_logger
from lens_migrate.migration.registry import default_registry
from lens_migrate.startup import HostContext, activate

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


class CLIRunner:
    """CLI command runner."""

    def __init__(self, parser: CLIParser | None = None) -> None:
        self.parser = parser or CLIParser()
        self.command_handlers = {
            "activate": self._activate,
            "status": self._status,
        }

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse arguments and execute the selected command.

        Returns:
            Process exit code

        """
        args = self.parser.parse_args(argv)

        if args.version:
            print(__version__)
            return EXIT_OK

        if not args.command:
            print("No command specified. Use --help.")
            return EXIT_USAGE

        try:
            SemVer.parse(args.current_version)
            return self.command_handlers[args.command](args)
        except LensMigrateError as e:
            logger.error("%s failed: %s", args.command, e)
            print(f"Error: {e}")
            return EXIT_ERROR

    def _build_context(self, args: Namespace) -> HostContext:
        settings = SettingsStore(
            user_file=args.user_settings or Paths.USER_SETTINGS_FILE,
            workspace_file=args.workspace_settings,
        )
        state = GlobalState(args.state or Paths.STATE_FILE)
        return HostContext(settings, state, version=args.current_version)

    def _activate(self, args: Namespace) -> int:
        context = self._build_context(args)
        result = activate(context)

        if not result.enabled:
            print("Extension is disabled; nothing was migrated.")
            return EXIT_OK

        report = result.report
        if result.previous_version is None:
            print(f"First run: recorded v{result.version}.")
        elif report is None or report.aborted:
            reason = report.error if report else "see log for details"
            print(f"Migration from v{result.previous_version} aborted: {reason}")
        else:
            print(
                f"Migrated v{result.previous_version} -> v{result.version}: "
                f"{len(report.applied)} applied, {len(report.failed)} failed "
                f"across {len(report.batches)} batch(es)."
            )
            for outcome in report.failed:
                print(f"  failed: {outcome.rule.describe()}")

        if result.show_whats_new:
            print(f"See what's new in v{result.version}.")
        return EXIT_OK

    def _status(self, args: Namespace) -> int:
        context = self._build_context(args)
        previous = context.global_state.previous_version()

        print(f"Current version:  v{context.version}")
        if previous is None:
            print("Recorded version: none (first run)")
            return EXIT_OK

        print(f"Recorded version: v{previous}")
        pending = default_registry().applicable(SemVer.parse(previous))
        if not pending:
            print("Settings are current.")
            return EXIT_OK

        print("Pending migrations:")
        for batch in pending:
            print(
                f"  v{batch.threshold}: {batch.description} "
                f"({len(batch.rules)} rules)"
            )
        return EXIT_OK
