"""Defaults for the current settings schema.

These form the read-only bottom layer of ``SettingsStore``: ``get`` falls
back to them, ``has`` never counts them. Legacy keys have no defaults.
"""

from typing import Any

from lens_migrate.constants import SETTINGS_NAMESPACE

HIGHLIGHT_LOCATIONS = ["gutter", "line", "overview"]

EXTENSION_DEFAULTS: dict[str, Any] = {
    "blame": {
        "avatars": True,
        "compact": True,
        "dateFormat": None,
        "format": "${message|40?} ${agoOrDate|14-}",
        "heatmap": {"enabled": True, "location": "right"},
        "highlight": {"enabled": True, "locations": HIGHLIGHT_LOCATIONS},
        "ignoreWhitespace": False,
        "separateLines": True,
    },
    "codeLens": {
        "enabled": True,
        "scopes": ["document", "containers"],
        "scopesByLanguage": [],
        "symbolScopes": [],
    },
    "currentLine": {
        "dateFormat": None,
        "enabled": True,
        "format": "${authorAgoOrDate} • ${message}",
        "scrollable": True,
    },
    "debug": False,
    "explorers": {
        "avatars": True,
        "commitFileFormat": "${filePath}",
        "commitFormat": "${message} • ${authorAgoOrDate}",
        "stashFileFormat": "${filePath}",
        "stashFormat": "${message}",
        "statusFileFormat": "${working}${filePath}",
    },
    "hovers": {
        "annotations": {
            "changes": True,
            "details": True,
            "enabled": True,
            "over": "line",
        },
        "currentLine": {
            "changes": True,
            "details": True,
            "enabled": True,
            "over": "annotation",
        },
        "enabled": True,
    },
    "keymap": "chorded",
    "outputLevel": "silent",
    "recentChanges": {
        "highlight": {"locations": HIGHLIGHT_LOCATIONS},
    },
    "showWhatsNewAfterUpgrades": True,
}

# Full document defaults, including the host-owned ``git`` section
DEFAULT_SETTINGS: dict[str, Any] = {
    "git": {"enabled": True},
    SETTINGS_NAMESPACE: EXTENSION_DEFAULTS,
}
