"""Typed access to the language, theme and chart-period selections."""

from __future__ import annotations

import locale
import os

from stock_checker.core.models import Language, PeriodKey, Theme
from stock_checker.market.windowing import DEFAULT_PERIOD, parse_period
from stock_checker.prefs.store import PreferenceStore

LANGUAGE_KEY = "language"
THEME_KEY = "theme"
PERIOD_KEY = "chartPeriod"


def system_language() -> Language:
    """Japanese if the process locale is Japanese, English otherwise."""
    tag = os.environ.get("LC_ALL") or os.environ.get("LANG") or locale.getlocale()[0] or ""
    return Language.JA if tag.lower().startswith("ja") else Language.EN


class Preferences:
    """Reads and writes UI selections through a PreferenceStore.

    Stored values that are not recognised are ignored in favour of the
    default, never propagated.
    """

    def __init__(self, store: PreferenceStore) -> None:
        self._store = store

    # -- Language --

    @property
    def language(self) -> Language:
        saved = self._store.get(LANGUAGE_KEY)
        if saved in (Language.JA, Language.EN):
            return Language(saved)
        return system_language()

    def set_language(self, language: Language | str) -> Language:
        lang = Language(language)
        self._store.set(LANGUAGE_KEY, lang.value)
        return lang

    def toggle_language(self) -> Language:
        return self.set_language(Language.EN if self.language == Language.JA else Language.JA)

    # -- Theme --

    @property
    def theme(self) -> Theme:
        saved = self._store.get(THEME_KEY)
        return Theme.DARK if saved == Theme.DARK else Theme.LIGHT

    @property
    def is_dark_mode(self) -> bool:
        return self.theme == Theme.DARK

    def set_theme(self, theme: Theme | str) -> Theme:
        value = Theme(theme)
        self._store.set(THEME_KEY, value.value)
        return value

    def toggle_theme(self) -> Theme:
        return self.set_theme(Theme.LIGHT if self.is_dark_mode else Theme.DARK)

    # -- Chart period --

    @property
    def period(self) -> PeriodKey:
        return parse_period(self._store.get(PERIOD_KEY)) or DEFAULT_PERIOD

    def set_period(self, period: PeriodKey | str) -> PeriodKey:
        """Persist ``period``.

        Raises:
            ValueError: If ``period`` is not a known PeriodKey.
        """
        key = period if isinstance(period, PeriodKey) else parse_period(period)
        if key is None:
            raise ValueError(f"unknown chart period: {period!r}")
        self._store.set(PERIOD_KEY, key.value)
        return key
