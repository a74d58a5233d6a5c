"""Settings migration package.

Architecture:
- rules: MigrationRule / MigrationBatch records and their builders
- transforms: value conversions referenced by rules
- registry: the ordered batches shipped with each schema change
- engine: MigrationEngine, which interprets the registry against a store
"""

from lens_migrate.migration.engine import (
    MigrationEngine,
    MigrationReport,
    OutcomeStatus,
    RuleOutcome,
)
from lens_migrate.migration.registry import (
    MIGRATION_BATCHES,
    MigrationRegistry,
    default_registry,
)
from lens_migrate.migration.rules import (
    NO_FALLBACK,
    MigrationBatch,
    MigrationMode,
    MigrationRule,
    as_backfill,
    migrate,
    migrate_if_missing,
)

__all__ = [
    "MIGRATION_BATCHES",
    "NO_FALLBACK",
    "MigrationBatch",
    "MigrationEngine",
    "MigrationMode",
    "MigrationRegistry",
    "MigrationReport",
    "MigrationRule",
    "OutcomeStatus",
    "RuleOutcome",
    "as_backfill",
    "default_registry",
    "migrate",
    "migrate_if_missing",
]
