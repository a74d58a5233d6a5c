"""Value transforms used by migration rules.

Every transform takes ``(source_value, current_destination_value)`` and
returns the new destination value. Rejected input raises
``RuleTransformError``; the engine then falls back or skips the rule.
Inputs are never mutated.
"""

from typing import Any

from lens_migrate.exceptions import RuleTransformError
from lens_migrate.migration.rules import Transform


def _require_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        msg = f"expected a boolean, got {type(value).__name__}"
        raise RuleTransformError(msg, repr(value))
    return value


def _require_list(value: Any) -> list:
    if not isinstance(value, list):
        msg = f"expected a list, got {type(value).__name__}"
        raise RuleTransformError(msg, repr(value))
    return value


def line_or_annotation(value: Any, current: Any) -> str:
    """Map the legacy ``wholeLine`` flag onto the ``over`` enum."""
    return "line" if _require_bool(value) else "annotation"


def boolean_to_enum(primary: str) -> Transform:
    """Build a transform from a legacy flag to an enum setting.

    ``True`` selects ``primary``. ``False`` keeps whatever the destination
    currently holds, so an existing choice in the new setting survives.
    """

    def transform(value: Any, current: Any) -> Any:
        return primary if _require_bool(value) else current

    return transform


def rename_list_member(old: str, new: str) -> Transform:
    """Build a transform replacing one enum member inside a list.

    The first exact match is replaced; a list without ``old`` comes back
    unchanged (as a copy).
    """

    def transform(value: Any, current: Any) -> list:
        members = list(_require_list(value))
        if old in members:
            members[members.index(old)] = new
        return members

    return transform


def replace_value(old: Any, new: Any) -> Transform:
    """Build a transform swapping one retired value for its replacement."""

    def transform(value: Any, current: Any) -> Any:
        return new if value == old else value

    return transform


def per_language_scopes(value: Any, current: Any) -> list[dict[str, Any]]:
    """Reshape ``perLanguageLocations`` entries into ``scopesByLanguage``.

    ``{language, locations, customSymbols}`` becomes
    ``{language, scopes, symbolScopes}``; absent keys stay absent.
    """
    renames = {
        "language": "language",
        "locations": "scopes",
        "customSymbols": "symbolScopes",
    }
    scopes = []
    for entry in _require_list(value):
        if not isinstance(entry, dict):
            msg = f"expected an object per language, got {type(entry).__name__}"
            raise RuleTransformError(msg, repr(entry))
        scopes.append(
            {new: entry[old] for old, new in renames.items() if old in entry}
        )
    return scopes
