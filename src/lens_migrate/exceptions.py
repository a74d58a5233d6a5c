"""Exception classes for lens-migrate operations."""


class LensMigrateError(Exception):
    """Base exception for lens-migrate operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional setting key, file or version that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class ParseError(LensMigrateError, ValueError):
    """Raised when a version string cannot be parsed."""

    error_prefix = "Invalid version"


class RuleTransformError(LensMigrateError):
    """Raised when a migration transform rejects its input."""

    error_prefix = "Transform failed"


class StoreAccessError(LensMigrateError):
    """Raised when reading or writing a settings or state file fails."""

    error_prefix = "Settings access failed"


class HostDisabledError(LensMigrateError):
    """Raised on request when the host has disabled the extension."""

    error_prefix = "Extension disabled"
