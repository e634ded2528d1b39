"""Quote and history gateways: upstream call + classification + transform.

Every public method returns an ``Outcome`` and never raises for upstream or
input problems. Programming errors (bugs) still propagate.
"""

from __future__ import annotations

import logging
from typing import Any

from stock_checker.core.exceptions import MalformedPayloadError, UpstreamUnavailableError
from stock_checker.core.models import (
    ApiKey,
    HistoryResult,
    Outcome,
    OutcomeKind,
    QuoteRecord,
    Symbol,
)
from stock_checker.market.classifier import classify
from stock_checker.market.client import GLOBAL_QUOTE, TIME_SERIES_DAILY, AlphaVantageClient
from stock_checker.market.transforms import DailySeriesAdapter, GlobalQuoteAdapter

logger = logging.getLogger(__name__)

# Free tier serves only the latest 100 trading days; always ask for exactly that
COMPACT_OUTPUT = "compact"

_QUOTE_KEY = "Global Quote"
_SERIES_KEY = "Time Series (Daily)"
_META_KEY = "Meta Data"
_META_SYMBOL = "2. Symbol"
_META_LAST_REFRESHED = "3. Last Refreshed"


def validate_request(symbol: Symbol | None, api_key: ApiKey | None) -> Outcome[Any] | None:
    """Return an INVALID outcome if either input is blank, else None."""
    if symbol is None or not symbol.strip():
        return Outcome.failure(OutcomeKind.INVALID, "missing_symbol")
    if api_key is None or not api_key.strip():
        return Outcome.failure(OutcomeKind.INVALID, "missing_api_key")
    return None


async def _fetch_payload(
    client: AlphaVantageClient,
    function: str,
    symbol: Symbol,
    api_key: ApiKey,
    **params: str,
) -> Outcome[dict[str, Any]]:
    """Call upstream and run the classifier on the decoded body."""
    try:
        payload = await client.query(function, symbol, api_key, **params)
    except UpstreamUnavailableError as e:
        logger.warning("Provider unavailable for %s %s: %s", function, symbol, e)
        return Outcome.failure(OutcomeKind.UPSTREAM_UNAVAILABLE, "upstream_error", str(e))
    except MalformedPayloadError as e:
        logger.warning("Unusable %s body for %s: %s", function, symbol, e)
        return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload", str(e))

    signal = classify(payload)
    if signal is not None:
        logger.info(
            "Provider signalled %r for %s %s -> %s",
            signal.signal_key, function, symbol, signal.kind,
        )
        return Outcome.failure(signal.kind, signal.reason)
    return Outcome.success(payload)


def _non_empty_mapping(payload: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = payload.get(key)
    if isinstance(value, dict) and value:
        return value
    return None


class QuoteGateway:
    """Current-quote lookups against the provider's GLOBAL_QUOTE function."""

    def __init__(
        self,
        client: AlphaVantageClient,
        adapter: GlobalQuoteAdapter | None = None,
    ) -> None:
        self._client = client
        self._adapter = adapter or GlobalQuoteAdapter()

    async def fetch_quote(self, symbol: Symbol, api_key: ApiKey) -> Outcome[QuoteRecord]:
        """Fetch and normalize the current quote for ``symbol``.

        Outcomes:
            OK with a QuoteRecord; INVALID for blank inputs (no network
            access); UPSTREAM_UNAVAILABLE; PROVIDER_REJECTED or RATE_LIMITED
            from the classifier; NOT_FOUND for an absent or empty quote;
            MALFORMED for missing or unparseable fields.
        """
        invalid = validate_request(symbol, api_key)
        if invalid is not None:
            return invalid
        symbol = symbol.strip().upper()

        fetched = await _fetch_payload(self._client, GLOBAL_QUOTE, symbol, api_key)
        if not fetched.is_ok:
            return Outcome.failure(fetched.kind, fetched.reason, fetched.detail)

        quote = _non_empty_mapping(fetched.unwrap(), _QUOTE_KEY)
        if quote is None:
            logger.info("No quote data for %s", symbol)
            return Outcome.failure(OutcomeKind.NOT_FOUND, "quote_not_found")

        try:
            record = self._adapter.adapt(quote)
        except MalformedPayloadError as e:
            logger.warning("Malformed quote for %s: %s", symbol, e)
            return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload", str(e))

        logger.info("Quote for %s: %.2f", record.symbol, record.price)
        return Outcome.success(record)


class HistoryGateway:
    """Daily-series lookups against the provider's TIME_SERIES_DAILY function."""

    def __init__(
        self,
        client: AlphaVantageClient,
        adapter: DailySeriesAdapter | None = None,
    ) -> None:
        self._client = client
        self._adapter = adapter or DailySeriesAdapter()

    async def fetch_history(self, symbol: Symbol, api_key: ApiKey) -> Outcome[HistoryResult]:
        """Fetch the compact daily series for ``symbol``, newest bar first.

        Outcomes mirror ``QuoteGateway.fetch_quote``; NOT_FOUND covers an
        absent or empty series and MALFORMED also covers metadata lacking
        the symbol or last-refreshed fields.
        """
        invalid = validate_request(symbol, api_key)
        if invalid is not None:
            return invalid
        symbol = symbol.strip().upper()

        fetched = await _fetch_payload(
            self._client, TIME_SERIES_DAILY, symbol, api_key, outputsize=COMPACT_OUTPUT
        )
        if not fetched.is_ok:
            return Outcome.failure(fetched.kind, fetched.reason, fetched.detail)

        payload = fetched.unwrap()
        series = _non_empty_mapping(payload, _SERIES_KEY)
        if series is None:
            logger.info("No daily series for %s", symbol)
            return Outcome.failure(OutcomeKind.NOT_FOUND, "quote_not_found")

        meta = payload.get(_META_KEY)
        if (
            not isinstance(meta, dict)
            or meta.get(_META_SYMBOL) is None
            or meta.get(_META_LAST_REFRESHED) is None
        ):
            logger.warning("Daily series for %s lacks symbol/refresh metadata", symbol)
            return Outcome.failure(
                OutcomeKind.MALFORMED, "malformed_payload", "metadata incomplete"
            )

        try:
            bars = self._adapter.adapt(series)
        except MalformedPayloadError as e:
            logger.warning("Malformed daily series for %s: %s", symbol, e)
            return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload", str(e))

        logger.info("History for %s: %d bars", symbol, len(bars))
        return Outcome.success(
            HistoryResult(
                symbol=str(meta[_META_SYMBOL]),
                bars=bars,
                last_refreshed=str(meta[_META_LAST_REFRESHED]),
            )
        )
