"""Domain values shared across the config and migration packages."""

from lens_migrate.domain.version import SemVer, compare, compare_versions

__all__ = ["SemVer", "compare", "compare_versions"]
