"""Durable global state for the extension.

A small JSON key/value file that outlives settings edits. The only key this
package relies on is the previous-version marker, read once before
migration and written once after it.
"""

import copy
from pathlib import Path
from typing import Any

from lens_migrate.config.jsonfile import load_json_file, save_json_file
from lens_migrate.constants import STATE_KEY_VERSION
from lens_migrate.logger import get_logger

logger = get_logger(__name__)


class GlobalState:
    """Key/value state persisted to a JSON file (memory-only when no path)."""

    def __init__(
        self,
        file_path: Path | None = None,
        initial: dict[str, Any] | None = None,
    ) -> None:
        self.file_path = file_path
        self._data: dict[str, Any] | None = (
            copy.deepcopy(initial) if initial is not None else None
        )

    @property
    def data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = load_json_file(self.file_path) if self.file_path else {}
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value.

        Raises:
            StoreAccessError: If the state file cannot be read

        """
        return copy.deepcopy(self.data.get(key, default))

    def update(self, key: str, value: Any) -> None:
        """Store a value and persist the file; ``None`` removes the key.

        Raises:
            StoreAccessError: If the state file cannot be written

        """
        updated = dict(self.data)
        if value is None:
            updated.pop(key, None)
        else:
            updated[key] = copy.deepcopy(value)

        if self.file_path is not None:
            save_json_file(self.file_path, updated)
        self._data = updated

    def keys(self) -> list[str]:
        return list(self.data)

    # Previous-version marker

    def previous_version(self) -> str | None:
        """Get the version recorded by the last startup, if any."""
        value = self.get(STATE_KEY_VERSION)
        if value is None:
            return None
        return str(value)

    def record_version(self, version: str) -> None:
        """Record ``version`` as the marker for the next startup."""
        self.update(STATE_KEY_VERSION, version)
        logger.debug("Recorded version marker %s", version)
