"""Layered settings store.

A settings document is read through three layers, highest priority first:

    workspace settings  ->  user settings  ->  schema defaults

The two writable layers are JSON files. Values are addressed with dotted
paths (``blame.highlight.locations``). A top-level key may itself be a
dotted path (``"gitlens.blame.avatars": true``, the way editors usually
write them) or an object holding the rest of the path; below the top level
keys are plain object keys and are never split, since setting values such
as ``files.exclude`` use globs and file names as keys.

Writes keep the file's own shape: an existing value is replaced where it
lives, a new value goes into the deepest existing object on its path, and
a file written with flat dotted keys stays flat. Everything else in the
file is saved back unchanged.

Every write is persisted immediately; there is no batching or transaction.
A failed write leaves the in-memory layer as it was before the call.
"""

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from lens_migrate.config.jsonfile import load_json_file, save_json_file
from lens_migrate.config.schema import DEFAULT_SETTINGS
from lens_migrate.exceptions import StoreAccessError
from lens_migrate.logger import get_logger

logger = get_logger(__name__)

_MISSING = object()

# (container, key) pairs from the top-level key down to the value
_Trail = list[tuple[dict[str, Any], str]]


class Scope(Enum):
    """Writable settings layers, in ascending priority."""

    USER = "user"
    WORKSPACE = "workspace"


def _split_path(path: str) -> list[str]:
    if not isinstance(path, str) or not path:
        raise StoreAccessError("setting path must be a non-empty string", repr(path))
    parts = path.split(".")
    if any(not part for part in parts):
        raise StoreAccessError("setting path has an empty segment", path)
    return parts


def _resolve(document: dict[str, Any], parts: list[str]) -> _Trail | None:
    """Find where the value at ``parts`` is stored.

    Longer dotted top-level keys win over shorter ones, so
    ``"gitlens.blame.avatars"`` shadows ``"gitlens": {"blame": ...}``.

    Returns:
        Trail of (container, key) pairs, or None when the value is not set

    """
    for split in range(len(parts), 0, -1):
        top_key = ".".join(parts[:split])
        if top_key not in document:
            continue

        trail: _Trail = [(document, top_key)]
        node = document[top_key]
        for part in parts[split:]:
            if not isinstance(node, dict) or part not in node:
                break
            trail.append((node, part))
            node = node[part]
        else:
            return trail
    return None


def _lookup(document: dict[str, Any], parts: list[str]) -> Any:
    trail = _resolve(document, parts)
    if trail is None:
        return _MISSING
    container, key = trail[-1]
    return container[key]


def _assign_nested(
    node: dict[str, Any], parts: list[str], value: Any, path: str
) -> None:
    for part in parts[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            msg = f"'{part}' holds a {type(child).__name__}, not an object"
            raise StoreAccessError(msg, path)
        node = child
    node[parts[-1]] = value


def _assign(document: dict[str, Any], parts: list[str], value: Any) -> None:
    trail = _resolve(document, parts)
    if trail is not None:
        container, key = trail[-1]
        container[key] = value
        return

    path = ".".join(parts)
    for split in range(len(parts) - 1, 0, -1):
        top_key = ".".join(parts[:split])
        if top_key not in document:
            continue
        node = document[top_key]
        if not isinstance(node, dict):
            msg = f"'{top_key}' holds a {type(node).__name__}, not an object"
            raise StoreAccessError(msg, path)
        _assign_nested(node, parts[split:], value, path)
        return

    if any(key.startswith(f"{parts[0]}.") for key in document):
        document[path] = value
    else:
        _assign_nested(document, parts, value, path)


def _remove(document: dict[str, Any], parts: list[str]) -> bool:
    """Delete a value and prune objects left empty by the deletion."""
    trail = _resolve(document, parts)
    if trail is None:
        return False

    container, key = trail.pop()
    del container[key]
    for container, key in reversed(trail):
        if container[key]:
            break
        del container[key]
    return True


class SettingsLayer:
    """One writable JSON settings document.

    A layer without a file path lives only in memory.
    """

    def __init__(
        self,
        scope: Scope,
        file_path: Path | None = None,
        document: dict[str, Any] | None = None,
    ) -> None:
        self.scope = scope
        self.file_path = file_path
        self._document: dict[str, Any] | None = (
            copy.deepcopy(document) if document is not None else None
        )

    @property
    def document(self) -> dict[str, Any]:
        """Get the loaded document, reading the file on first access."""
        if self._document is None:
            self._document = (
                load_json_file(self.file_path) if self.file_path else {}
            )
            logger.debug(
                "Loaded %s settings from %s", self.scope.value, self.file_path
            )
        return self._document

    def reload(self) -> None:
        """Drop the cached document so the next access rereads the file."""
        if self.file_path is not None:
            self._document = None

    def write(self, mutate: Callable[[dict[str, Any]], Any]) -> None:
        """Apply ``mutate`` to the document and persist it.

        Raises:
            StoreAccessError: If the mutation or the save fails; the
                in-memory document is restored first

        """
        snapshot = copy.deepcopy(self.document)
        try:
            mutate(self._document)
            if self.file_path is not None:
                save_json_file(self.file_path, self._document)
        except StoreAccessError:
            self._document = snapshot
            raise


@dataclass
class SettingInspection:
    """Explicit values of one setting per scope, plus its default."""

    key: str
    default_value: Any = None
    values: dict[Scope, Any] = field(default_factory=dict)

    @property
    def user_value(self) -> Any:
        return self.values.get(Scope.USER)

    @property
    def workspace_value(self) -> Any:
        return self.values.get(Scope.WORKSPACE)

    @property
    def is_set(self) -> bool:
        return bool(self.values)


class SettingsStore:
    """Read and write settings at dotted paths across layers."""

    def __init__(
        self,
        user_file: Path | None = None,
        workspace_file: Path | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            user_file: User settings file (memory-only when None)
            workspace_file: Workspace settings file (memory-only when None)
            defaults: Default document (defaults to the current schema)

        """
        self._layers = {
            Scope.USER: SettingsLayer(Scope.USER, user_file),
            Scope.WORKSPACE: SettingsLayer(Scope.WORKSPACE, workspace_file),
        }
        self._defaults = copy.deepcopy(
            DEFAULT_SETTINGS if defaults is None else defaults
        )

    @classmethod
    def from_documents(
        cls,
        user: dict[str, Any] | None = None,
        workspace: dict[str, Any] | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> "SettingsStore":
        """Create a memory-only store seeded with documents."""
        store = cls(defaults=defaults)
        store._layers[Scope.USER] = SettingsLayer(Scope.USER, None, user or {})
        store._layers[Scope.WORKSPACE] = SettingsLayer(
            Scope.WORKSPACE, None, workspace or {}
        )
        return store

    @property
    def scopes(self) -> tuple[Scope, ...]:
        """Writable scopes, in the order migrations visit them."""
        return (Scope.USER, Scope.WORKSPACE)

    def get(
        self, path: str, default: Any = None, *, scope: Scope | None = None
    ) -> Any:
        """Get a setting value.

        Args:
            path: Dotted setting path
            default: Returned when nothing (not even a schema default) exists
            scope: Read only this layer instead of the effective value

        Returns:
            A copy of the value

        Raises:
            StoreAccessError: If the path is invalid or a layer cannot be read

        """
        parts = _split_path(path)
        if scope is not None:
            layers = [self._layers[scope].document]
        else:
            layers = [
                self._layers[Scope.WORKSPACE].document,
                self._layers[Scope.USER].document,
                self._defaults,
            ]

        for document in layers:
            value = _lookup(document, parts)
            if value is not _MISSING:
                return copy.deepcopy(value)
        return default

    def has(self, path: str, *, scope: Scope | None = None) -> bool:
        """Check whether a setting is explicitly set (defaults do not count)."""
        parts = _split_path(path)
        scopes = self.scopes if scope is None else (scope,)
        return any(
            _lookup(self._layers[s].document, parts) is not _MISSING
            for s in scopes
        )

    def set(self, path: str, value: Any, *, scope: Scope = Scope.USER) -> None:
        """Set a setting value in one layer and persist it.

        Raises:
            StoreAccessError: If the path collides with a non-object value
                or the layer cannot be saved

        """
        parts = _split_path(path)
        stored = copy.deepcopy(value)
        self._layers[scope].write(lambda doc: _assign(doc, parts, stored))
        logger.debug("Set %s in %s settings", path, scope.value)

    def unset(self, path: str, *, scope: Scope = Scope.USER) -> None:
        """Remove a setting from one layer, pruning emptied parents."""
        parts = _split_path(path)
        layer = self._layers[scope]
        if _lookup(layer.document, parts) is _MISSING:
            return
        layer.write(lambda doc: _remove(doc, parts))
        logger.debug("Unset %s in %s settings", path, scope.value)

    def inspect(self, path: str) -> SettingInspection:
        """Get the per-scope explicit values of a setting."""
        parts = _split_path(path)
        default = _lookup(self._defaults, parts)
        inspection = SettingInspection(
            key=path,
            default_value=None if default is _MISSING else copy.deepcopy(default),
        )
        for scope in self.scopes:
            value = _lookup(self._layers[scope].document, parts)
            if value is not _MISSING:
                inspection.values[scope] = copy.deepcopy(value)
        return inspection

    def document(self, scope: Scope) -> dict[str, Any]:
        """Get a copy of one layer's whole document."""
        return copy.deepcopy(self._layers[scope].document)

    def reload(self) -> None:
        """Reread every file-backed layer on next access."""
        for layer in self._layers.values():
            layer.reload()

    def section(self, prefix: str) -> "SettingsSection":
        """Get a view addressing paths relative to ``prefix``."""
        return SettingsSection(self, prefix)


class SettingsSection:
    """Prefixed view over a ``SettingsStore``.

    The migration engine works against the extension namespace through
    this view, so rule paths stay relative (``blame.avatars``).
    """

    def __init__(self, store: SettingsStore, prefix: str) -> None:
        _split_path(prefix)
        self.store = store
        self.prefix = prefix

    def _qualify(self, path: str) -> str:
        _split_path(path)
        return f"{self.prefix}.{path}"

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return self.store.scopes

    def get(
        self, path: str, default: Any = None, *, scope: Scope | None = None
    ) -> Any:
        return self.store.get(self._qualify(path), default, scope=scope)

    def has(self, path: str, *, scope: Scope | None = None) -> bool:
        return self.store.has(self._qualify(path), scope=scope)

    def set(self, path: str, value: Any, *, scope: Scope = Scope.USER) -> None:
        self.store.set(self._qualify(path), value, scope=scope)

    def unset(self, path: str, *, scope: Scope = Scope.USER) -> None:
        self.store.unset(self._qualify(path), scope=scope)

    def inspect(self, path: str) -> SettingInspection:
        inspection = self.store.inspect(self._qualify(path))
        inspection.key = path
        return inspection

    def section(self, prefix: str) -> "SettingsSection":
        return SettingsSection(self.store, self._qualify(prefix))
