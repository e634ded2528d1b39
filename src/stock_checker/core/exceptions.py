"""Custom exception hierarchy for stock-checker."""

from typing import Any


class StockCheckerError(Exception):
    """Base exception for all stock-checker errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(StockCheckerError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field (str): the config field that failed validation
        value (Any): the invalid value
    """


class ProviderError(StockCheckerError):
    """Failed to obtain a usable response from the market-data provider.

    Policy: never retried. The gateways convert these into Outcome values;
    nothing above the gateway layer should see one.

    Context keys:
        function (str): the upstream function, e.g. "GLOBAL_QUOTE"
        symbol (str): the requested symbol
    """


class UpstreamUnavailableError(ProviderError):
    """Transport failure or non-2xx status from the provider.

    Context keys:
        status_code (int | None): HTTP status if a response arrived
        error (str | None): transport exception type name
    """


class MalformedPayloadError(ProviderError):
    """2xx response whose body is not the JSON object we expect.

    Context keys:
        reason (str): what was wrong with the body
    """


class PreferenceError(StockCheckerError):
    """Preference store could not be read or written.

    Policy: raise immediately. Silently resetting user settings is worse.

    Context keys:
        path (str): the backing file
    """
