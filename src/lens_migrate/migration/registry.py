"""Registry of historical settings migrations.

Each batch belongs to the release that changed the settings schema. A user
upgrading from version ``P`` gets every batch whose threshold is ``>= P``,
applied oldest first, so later batches can refine earlier renames.
"""

from collections.abc import Iterable, Iterator

from lens_migrate.domain.version import SemVer, compare
from lens_migrate.migration import transforms
from lens_migrate.migration.rules import (
    MigrationBatch,
    MigrationRule,
    as_backfill,
    migrate,
)


class MigrationRegistry:
    """Ordered, immutable collection of migration batches."""

    def __init__(self, batches: Iterable[MigrationBatch]) -> None:
        """Initialize the registry.

        Args:
            batches: Batches in strictly ascending threshold order

        Raises:
            ValueError: If thresholds are not strictly ascending

        """
        self._batches = tuple(batches)
        for earlier, later in zip(self._batches, self._batches[1:]):
            if compare(earlier.threshold, later.threshold) >= 0:
                msg = (
                    f"Migration batch {later.threshold} is registered after "
                    f"{earlier.threshold}; thresholds must be ascending"
                )
                raise ValueError(msg)

    def __iter__(self) -> Iterator[MigrationBatch]:
        return iter(self._batches)

    def __len__(self) -> int:
        return len(self._batches)

    @property
    def batches(self) -> tuple[MigrationBatch, ...]:
        return self._batches

    def applicable(self, previous: SemVer) -> list[MigrationBatch]:
        """Get the batches an upgrade from ``previous`` must apply, in order."""
        return [batch for batch in self._batches if batch.applies_to(previous)]

    def get(self, threshold: SemVer) -> MigrationBatch | None:
        """Get the batch registered for an exact threshold."""
        for batch in self._batches:
            if batch.threshold == threshold:
                return batch
        return None


# 7.5.10 reorganized annotation, code lens, hover and explorer settings
_SETTINGS_REORGANIZATION: tuple[MigrationRule, ...] = (
    migrate("annotations.file.gutter.gravatars", "blame.avatars"),
    migrate("annotations.file.gutter.compact", "blame.compact"),
    migrate("annotations.file.gutter.dateFormat", "blame.dateFormat"),
    migrate("annotations.file.gutter.format", "blame.format"),
    migrate(
        "annotations.file.gutter.heatmap.enabled", "blame.heatmap.enabled"
    ),
    migrate(
        "annotations.file.gutter.heatmap.location", "blame.heatmap.location"
    ),
    migrate(
        "annotations.file.gutter.lineHighlight.enabled",
        "blame.highlight.enabled",
    ),
    migrate(
        "annotations.file.gutter.lineHighlight.locations",
        "blame.highlight.locations",
    ),
    migrate("annotations.file.gutter.separateLines", "blame.separateLines"),
    migrate("codeLens.locations", "codeLens.scopes"),
    migrate(
        "codeLens.perLanguageLocations",
        "codeLens.scopesByLanguage",
        transforms.per_language_scopes,
    ),
    migrate("codeLens.customLocationSymbols", "codeLens.symbolScopes"),
    migrate("annotations.line.trailing.dateFormat", "currentLine.dateFormat"),
    migrate("blame.line.enabled", "currentLine.enabled"),
    migrate("annotations.line.trailing.format", "currentLine.format"),
    migrate(
        "annotations.file.gutter.hover.changes", "hovers.annotations.changes"
    ),
    migrate(
        "annotations.file.gutter.hover.details", "hovers.annotations.details"
    ),
    migrate(
        "annotations.file.gutter.hover.details", "hovers.annotations.enabled"
    ),
    migrate(
        "annotations.file.gutter.hover.wholeLine",
        "hovers.annotations.over",
        transforms.line_or_annotation,
    ),
    migrate(
        "annotations.line.trailing.hover.changes",
        "hovers.currentLine.changes",
    ),
    migrate(
        "annotations.line.trailing.hover.details",
        "hovers.currentLine.details",
    ),
    migrate("blame.line.enabled", "hovers.currentLine.enabled"),
    migrate(
        "annotations.line.trailing.hover.wholeLine",
        "hovers.currentLine.over",
        transforms.line_or_annotation,
    ),
    migrate("gitExplorer.gravatars", "explorers.avatars"),
    migrate("gitExplorer.commitFileFormat", "explorers.commitFileFormat"),
    migrate("gitExplorer.commitFormat", "explorers.commitFormat"),
    migrate("gitExplorer.stashFileFormat", "explorers.stashFileFormat"),
    migrate("gitExplorer.stashFormat", "explorers.stashFormat"),
    migrate("gitExplorer.statusFileFormat", "explorers.statusFileFormat"),
    migrate(
        "recentChanges.file.lineHighlight.locations",
        "recentChanges.highlight.locations",
    ),
)

_OVERVIEW_RULER_RENAME = transforms.rename_list_member("overviewRuler", "overview")

MIGRATION_BATCHES: tuple[MigrationBatch, ...] = (
    MigrationBatch(
        SemVer(7, 5, 10),
        _SETTINGS_REORGANIZATION,
        "Reorganize blame, code lens, hover and explorer settings",
    ),
    MigrationBatch(
        SemVer(8, 0, 0, "beta2"),
        (
            migrate(
                "debug",
                "outputLevel",
                transforms.boolean_to_enum("debug"),
            ),
        ),
        "Replace the debug flag with outputLevel",
    ),
    MigrationBatch(
        SemVer(8, 0, 0, "rc"),
        (
            migrate(
                "blame.highlight.locations",
                "blame.highlight.locations",
                _OVERVIEW_RULER_RENAME,
            ),
            migrate(
                "recentChanges.highlight.locations",
                "recentChanges.highlight.locations",
                _OVERVIEW_RULER_RENAME,
            ),
        ),
        "Rename the overviewRuler highlight location to overview",
    ),
    MigrationBatch(
        SemVer(8, 0, 0),
        as_backfill(_SETTINGS_REORGANIZATION),
        "Backfill reorganized settings missed by earlier upgrades",
    ),
    MigrationBatch(
        SemVer(8, 0, 2),
        (
            migrate(
                "keymap",
                "keymap",
                transforms.replace_value("standard", "alternate"),
                fallback="alternate",
            ),
        ),
        "Replace the standard keymap with alternate",
    ),
)


def default_registry() -> MigrationRegistry:
    """Get the registry of every shipped migration."""
    return MigrationRegistry(MIGRATION_BATCHES)
