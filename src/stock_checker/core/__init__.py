"""stock_checker.core: Foundation types, config, and exceptions."""

from stock_checker.core.config import (
    APIConfig,
    LoggingConfig,
    PreferencesConfig,
    ProviderConfig,
    StockCheckerConfig,
    load_config,
)
from stock_checker.core.exceptions import (
    ConfigError,
    MalformedPayloadError,
    PreferenceError,
    ProviderError,
    StockCheckerError,
    UpstreamUnavailableError,
)
from stock_checker.core.models import (
    ApiKey,
    Bar,
    HistoryResult,
    Language,
    Outcome,
    OutcomeKind,
    PeriodKey,
    QuoteRecord,
    Symbol,
    Theme,
)

__all__ = [
    # Type aliases
    "ApiKey",
    "Symbol",
    # Enums
    "Language",
    "OutcomeKind",
    "PeriodKey",
    "Theme",
    # Market data models
    "Bar",
    "HistoryResult",
    "QuoteRecord",
    "Outcome",
    # Config
    "StockCheckerConfig",
    "ProviderConfig",
    "APIConfig",
    "PreferencesConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "StockCheckerError",
    "ConfigError",
    "ProviderError",
    "UpstreamUnavailableError",
    "MalformedPayloadError",
    "PreferenceError",
]
