"""stock_checker.prefs: persisted UI selections."""

from stock_checker.prefs.preferences import (
    LANGUAGE_KEY,
    PERIOD_KEY,
    THEME_KEY,
    Preferences,
    system_language,
)
from stock_checker.prefs.store import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    PreferenceStore,
)

__all__ = [
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "Preferences",
    "system_language",
    "LANGUAGE_KEY",
    "THEME_KEY",
    "PERIOD_KEY",
]
