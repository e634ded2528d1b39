"""stock_checker.i18n: ja/en message tables."""

from stock_checker.i18n.translations import DEFAULT_LANGUAGE, TRANSLATIONS, translate

__all__ = ["DEFAULT_LANGUAGE", "TRANSLATIONS", "translate"]
