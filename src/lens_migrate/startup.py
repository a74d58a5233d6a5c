"""Extension activation sequence.

Runs once per process:

1. Read the host ``git.enabled`` flag; when false, mark the context
   disabled and stop. Nothing else runs and the marker is left alone.
2. Apply the ``outputLevel`` setting to logging.
3. Read the previous-version marker and run the migration engine.
4. Record the running version as the new marker, whatever the migration
   outcome, so a failing migration is not retried on every launch.
5. Decide whether to show the "what's new" page.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from lens_migrate.config.state import GlobalState
from lens_migrate.config.store import SettingsSection, SettingsStore
from lens_migrate.constants import (
    HOST_VERSION,
    KEY_GIT_ENABLED,
    KEY_OUTPUT_LEVEL,
    KEY_SHOW_WHATS_NEW,
    SETTINGS_NAMESPACE,
    WELCOME_VERSION,
)
from lens_migrate.domain.version import SemVer
from lens_migrate.exceptions import HostDisabledError, ParseError, StoreAccessError
from lens_migrate.logger import apply_output_level, get_logger
from lens_migrate.migration.engine import MigrationEngine, MigrationReport
from lens_migrate.migration.registry import MigrationRegistry

logger = get_logger(__name__)

# (version, previous_version) -> None
WhatsNewCallback = Callable[[str, str | None], None]


@dataclass
class HostContext:
    """What the host hands the extension at activation.

    Attributes:
        settings: Layered settings store
        global_state: Durable state holding the version marker
        version: Running extension version
        enabled: Host-visible enabled flag, updated by ``activate``
        on_show_whats_new: Called when the what's-new page should open

    """

    settings: SettingsStore
    global_state: GlobalState
    version: str = HOST_VERSION
    enabled: bool = True
    on_show_whats_new: WhatsNewCallback | None = None


@dataclass
class ActivationResult:
    """Outcome of one activation."""

    enabled: bool
    version: str
    previous_version: str | None = None
    report: MigrationReport | None = None
    show_whats_new: bool = False
    duration_ms: int = 0

    def raise_if_disabled(self) -> None:
        """Turn the disabled short-circuit into an exception.

        Raises:
            HostDisabledError: If activation stopped at the enabled check

        """
        if not self.enabled:
            msg = f'"{KEY_GIT_ENABLED}": false'
            raise HostDisabledError(msg, self.version)


def activate(
    context: HostContext, registry: MigrationRegistry | None = None
) -> ActivationResult:
    """Activate the extension: gate, migrate, record the marker, notify.

    Never raises; every failure is logged.

    Args:
        context: Host context
        registry: Migration batches (defaults to every shipped migration)

    Returns:
        Activation result

    """
    start = time.perf_counter()
    version = context.version

    if not _is_enabled(context.settings):
        logger.info(
            'Extension (v%s) was NOT activated -- "%s": false',
            version,
            KEY_GIT_ENABLED,
        )
        context.enabled = False
        return ActivationResult(enabled=False, version=version)

    context.enabled = True
    section = context.settings.section(SETTINGS_NAMESPACE)
    _configure_logging(section)

    previous_version = _read_marker(context.global_state)
    report = _migrate(section, previous_version, registry)
    _write_marker(context.global_state, version)

    show = _show_whats_new(context, section, previous_version)

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info("Extension (v%s) activated in %d ms", version, duration_ms)
    return ActivationResult(
        enabled=True,
        version=version,
        previous_version=previous_version,
        report=report,
        show_whats_new=show,
        duration_ms=duration_ms,
    )


def _is_enabled(settings: SettingsStore) -> bool:
    try:
        return settings.get(KEY_GIT_ENABLED, True) is not False
    except StoreAccessError as e:
        logger.error("Could not read %s, assuming enabled: %s", KEY_GIT_ENABLED, e)
        return True


def _configure_logging(section: SettingsSection) -> None:
    try:
        output_level = section.get(KEY_OUTPUT_LEVEL)
    except StoreAccessError as e:
        logger.warning("Could not read %s: %s", KEY_OUTPUT_LEVEL, e)
        return
    if not apply_output_level(output_level):
        logger.warning("Ignoring unknown %s %r", KEY_OUTPUT_LEVEL, output_level)


def _read_marker(global_state: GlobalState) -> str | None:
    try:
        return global_state.previous_version()
    except StoreAccessError as e:
        logger.error("Could not read the previous version marker: %s", e)
        return None


def _write_marker(global_state: GlobalState, version: str) -> None:
    try:
        global_state.record_version(version)
    except StoreAccessError as e:
        logger.error("Could not record version marker %s: %s", version, e)


def _migrate(
    section: SettingsSection,
    previous_version: str | None,
    registry: MigrationRegistry | None,
) -> MigrationReport | None:
    try:
        return MigrationEngine(section, registry).run(previous_version)
    except Exception:
        logger.exception("Settings migration failed")
        return None


def _show_whats_new(
    context: HostContext,
    section: SettingsSection,
    previous_version: str | None,
) -> bool:
    try:
        show_after_upgrades = section.get(KEY_SHOW_WHATS_NEW, True) is not False
    except StoreAccessError as e:
        logger.warning("Could not read %s: %s", KEY_SHOW_WHATS_NEW, e)
        show_after_upgrades = True

    show = should_show_whats_new(
        context.version, previous_version, show_after_upgrades
    )
    if show and context.on_show_whats_new is not None:
        try:
            context.on_show_whats_new(context.version, previous_version)
        except Exception:
            logger.exception("What's new notification failed")
    return show


def should_show_whats_new(
    version: str,
    previous_version: str | None,
    show_after_upgrades: bool,  # noqa: FBT001
) -> bool:
    """Decide whether this activation should open the what's-new page.

    Shown on a first install (if enabled in settings), always after
    upgrading from exactly the welcome release, and otherwise only when the
    major.minor version moved forward.
    """
    if previous_version is None:
        logger.info("First-time install")
        return show_after_upgrades

    try:
        current = SemVer.parse(version)
        previous = SemVer.parse(previous_version)
    except ParseError as e:
        logger.debug("Not showing what's new: %s", e)
        return False

    if previous != current:
        logger.info("Upgraded from v%s to v%s", previous_version, version)
        if previous == SemVer.parse(WELCOME_VERSION):
            return True

    if not show_after_upgrades:
        return False

    # Same major.minor, or a downgrade
    return (current.major, current.minor) > (previous.major, previous.minor)
