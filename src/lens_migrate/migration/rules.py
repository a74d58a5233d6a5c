"""Declarative migration rules and version-gated batches."""

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lens_migrate.domain.version import SemVer, compare

# (source_value, current_destination_value) -> new destination value
Transform = Callable[[Any, Any], Any]


class MigrationMode(Enum):
    """How a rule treats a destination that already has a value."""

    OVERWRITE = "overwrite"
    ONLY_IF_DESTINATION_UNSET = "only_if_destination_unset"


class _NoFallback:
    def __repr__(self) -> str:
        return "NO_FALLBACK"


NO_FALLBACK: Any = _NoFallback()


@dataclass(frozen=True)
class MigrationRule:
    """Move one setting value from a legacy path to its current path.

    Attributes:
        source: Dotted path used by an earlier schema
        destination: Dotted path in the current schema (may equal source
            for in-place reshapes)
        transform: Optional value conversion
        mode: Overwrite, or write only when the destination is unset
        fallback: Written when the transform fails or no source exists

    """

    source: str
    destination: str
    transform: Transform | None = None
    mode: MigrationMode = MigrationMode.OVERWRITE
    fallback: Any = NO_FALLBACK

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not NO_FALLBACK

    def describe(self) -> str:
        if self.source == self.destination:
            return self.source
        return f"{self.source} -> {self.destination}"


def migrate(
    source: str,
    destination: str,
    transform: Transform | None = None,
    *,
    fallback: Any = NO_FALLBACK,
) -> MigrationRule:
    """Build a rule that always overwrites its destination."""
    return MigrationRule(source, destination, transform, fallback=fallback)


def migrate_if_missing(
    source: str,
    destination: str,
    transform: Transform | None = None,
    *,
    fallback: Any = NO_FALLBACK,
) -> MigrationRule:
    """Build a rule that only writes a destination with no explicit value."""
    return MigrationRule(
        source,
        destination,
        transform,
        MigrationMode.ONLY_IF_DESTINATION_UNSET,
        fallback,
    )


def as_backfill(rules: Iterable[MigrationRule]) -> tuple[MigrationRule, ...]:
    """Copy rules into only-if-missing mode for a later backfill pass."""
    return tuple(
        dataclasses.replace(rule, mode=MigrationMode.ONLY_IF_DESTINATION_UNSET)
        for rule in rules
    )


@dataclass(frozen=True)
class MigrationBatch:
    """Rules introduced by one schema-changing release."""

    threshold: SemVer
    rules: tuple[MigrationRule, ...]
    description: str = ""

    def applies_to(self, previous: SemVer) -> bool:
        """Check whether an upgrade from ``previous`` crosses this batch.

        True when the previous version is at or below the threshold.
        """
        return compare(previous, self.threshold) <= 0
