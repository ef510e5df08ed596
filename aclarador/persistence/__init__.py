"""
Persistence Layer

Local key-value storage for user settings (API key and character limit).
Analysis results are not persisted.
"""

from .settings_store import SettingsStore, StoredSettings, MIN_CHAR_LIMIT

__all__ = [
    "SettingsStore",
    "StoredSettings",
    "MIN_CHAR_LIMIT",
]
