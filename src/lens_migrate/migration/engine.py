"""Version-gated settings migration engine.

The engine walks the registry oldest batch first and applies every rule of
each batch the upgrade crosses. Failures are contained:

- an unparsable previous version aborts the run (nothing is written)
- a failing transform or settings access affects only its own rule

``MigrationEngine.run`` never raises; problems are logged and reported in
the returned ``MigrationReport``. Legacy source keys are never deleted, so
an older build opening the same settings still finds its keys.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lens_migrate.config.store import Scope, SettingsSection, SettingsStore
from lens_migrate.domain.version import SemVer
from lens_migrate.exceptions import (
    ParseError,
    RuleTransformError,
    StoreAccessError,
)
from lens_migrate.logger import get_logger
from lens_migrate.migration.registry import MigrationRegistry, default_registry
from lens_migrate.migration.rules import (
    MigrationBatch,
    MigrationMode,
    MigrationRule,
)

logger = get_logger(__name__)


class OutcomeStatus(Enum):
    """Result of executing one rule."""

    APPLIED = "applied"
    FALLBACK = "fallback"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RuleOutcome:
    """What one rule did during a run."""

    rule: MigrationRule
    threshold: SemVer
    status: OutcomeStatus = OutcomeStatus.SKIPPED
    scopes: list[Scope] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def wrote(self) -> bool:
        return bool(self.scopes)


@dataclass
class MigrationReport:
    """Summary of one engine run."""

    previous_version: str | None
    batches: list[SemVer] = field(default_factory=list)
    outcomes: list[RuleOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def applied(self) -> list[RuleOutcome]:
        return [o for o in self.outcomes if o.wrote]

    @property
    def failed(self) -> list[RuleOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def succeeded(self) -> bool:
        return not self.aborted and not self.failed


class MigrationEngine:
    """Apply registered migrations to a settings store or section."""

    def __init__(
        self,
        settings: SettingsSection | SettingsStore,
        registry: MigrationRegistry | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Store, or section view, that rule paths are relative to
            registry: Batches to apply (defaults to every shipped migration)

        """
        self.settings = settings
        self.registry = registry if registry is not None else default_registry()

    def run(self, previous_version: str | None) -> MigrationReport:
        """Migrate settings written by ``previous_version``.

        Args:
            previous_version: Version marker from the last startup; None on
                a first install, which migrates nothing

        Returns:
            Report of applied batches and per-rule outcomes

        """
        report = MigrationReport(previous_version)
        if previous_version is None:
            logger.debug("No previous version recorded, skipping migration")
            return report

        try:
            previous = SemVer.parse(previous_version)
            batches = self.registry.applicable(previous)
        except ParseError as e:
            logger.error("Settings migration aborted: %s", e)
            report.error = str(e)
            return report
        except Exception as e:
            logger.exception("Settings migration aborted unexpectedly")
            report.error = str(e)
            return report

        if not batches:
            logger.debug("Settings from v%s are already current", previous)
            return report

        for batch in batches:
            self._run_batch(batch, report)

        logger.info(
            "Migrated settings from v%s: %d rules applied, %d failed",
            previous,
            len(report.applied),
            len(report.failed),
        )
        return report

    def _run_batch(self, batch: MigrationBatch, report: MigrationReport) -> None:
        logger.debug(
            "Applying migration batch %s (%s)",
            batch.threshold,
            batch.description or "no description",
        )
        report.batches.append(batch.threshold)
        for rule in batch.rules:
            report.outcomes.append(self._execute_isolated(rule, batch.threshold))

    def _execute_isolated(
        self, rule: MigrationRule, threshold: SemVer
    ) -> RuleOutcome:
        try:
            return self.execute_rule(rule, threshold)
        except Exception as e:
            logger.warning(
                "Skipped settings migration %s: %s", rule.describe(), e
            )
            return RuleOutcome(
                rule, threshold, OutcomeStatus.FAILED, errors=[str(e)]
            )

    def execute_rule(
        self, rule: MigrationRule, threshold: SemVer
    ) -> RuleOutcome:
        """Apply one rule in every scope that holds its source.

        A scope that cannot be read or written is recorded as an error in
        the outcome; scopes already written stay listed.

        Raises:
            StoreAccessError: If the fallback cannot be written to the user
                settings

        """
        outcome = RuleOutcome(rule, threshold)
        used_fallback = False
        source_found = False

        for scope in self.settings.scopes:
            try:
                if not self.settings.has(rule.source, scope=scope):
                    continue
                source_found = True
                if self._apply_in_scope(rule, scope, outcome):
                    used_fallback = True
            except StoreAccessError as e:
                logger.warning(
                    "Could not migrate %s in %s settings: %s",
                    rule.describe(),
                    scope.value,
                    e,
                )
                outcome.errors.append(str(e))

        if not source_found and not outcome.errors and rule.has_fallback:
            destination_set = (
                rule.mode is MigrationMode.ONLY_IF_DESTINATION_UNSET
                and self.settings.has(rule.destination)
            )
            if not destination_set:
                self.settings.set(rule.destination, rule.fallback, scope=Scope.USER)
                outcome.scopes.append(Scope.USER)
                used_fallback = True

        if outcome.scopes:
            logger.debug(
                "Migrated %s (%s)",
                rule.describe(),
                ", ".join(scope.value for scope in outcome.scopes),
            )
        if outcome.errors:
            outcome.status = OutcomeStatus.FAILED
        elif outcome.scopes:
            outcome.status = (
                OutcomeStatus.FALLBACK if used_fallback else OutcomeStatus.APPLIED
            )
        return outcome

    def _apply_in_scope(
        self, rule: MigrationRule, scope: Scope, outcome: RuleOutcome
    ) -> bool:
        """Migrate one scope's value; return True if the fallback was used.

        Raises:
            StoreAccessError: If the scope cannot be read or written

        """
        if (
            rule.mode is MigrationMode.ONLY_IF_DESTINATION_UNSET
            and self.settings.has(rule.destination, scope=scope)
        ):
            return False

        value = self.settings.get(rule.source, scope=scope)
        used_fallback = False
        try:
            new_value = self._transform(rule, value)
        except RuleTransformError as e:
            if not rule.has_fallback:
                logger.warning(
                    "Could not migrate %s in %s settings: %s",
                    rule.describe(),
                    scope.value,
                    e,
                )
                outcome.errors.append(str(e))
                return False
            logger.warning(
                "Using fallback for %s in %s settings: %s",
                rule.describe(),
                scope.value,
                e,
            )
            new_value = rule.fallback
            used_fallback = True

        self.settings.set(rule.destination, new_value, scope=scope)
        outcome.scopes.append(scope)
        return used_fallback

    def _transform(self, rule: MigrationRule, value: Any) -> Any:
        """Run the rule's transform, normalizing failures.

        Raises:
            RuleTransformError: If the transform raised

        """
        if rule.transform is None:
            return value

        current = self.settings.get(rule.destination)
        try:
            return rule.transform(value, current)
        except RuleTransformError:
            raise
        except Exception as e:
            raise RuleTransformError(str(e), rule.describe()) from e
