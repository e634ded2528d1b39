"""Async HTTP client for the Alpha Vantage query endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stock_checker.core.config import ProviderConfig
from stock_checker.core.exceptions import MalformedPayloadError, UpstreamUnavailableError
from stock_checker.core.models import ApiKey, Symbol

logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO (httpcore at DEBUG), and ours carry
# the API key in the query string
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def quiet_transport_loggers() -> None:
    """Hold the transport loggers at WARNING so request URLs are never emitted."""
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


quiet_transport_loggers()

_USER_AGENT = "stock-checker/0.1"

# Upstream function names
GLOBAL_QUOTE = "GLOBAL_QUOTE"
TIME_SERIES_DAILY = "TIME_SERIES_DAILY"


class AlphaVantageClient:
    """Thin transport over ``GET {base_url}?function=...``.

    One call per method invocation: no retries, no caching. The provider's
    own rate limit is respected by the caller sequencing requests, not here.

    The API key travels only in the query string of the outgoing request;
    it is never logged or kept on the instance.

    Use via ``async with AlphaVantageClient(config) as client:`` or pass a
    shared ``httpx.AsyncClient`` that the caller owns.
    """

    def __init__(
        self,
        config: ProviderConfig,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_http = http is None
        self._client = http or httpx.AsyncClient(
            headers={"User-Agent": _USER_AGENT, "Accept": "application/json"},
            timeout=httpx.Timeout(config.request_timeout),
        )

    async def __aenter__(self) -> AlphaVantageClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._client.aclose()

    async def query(
        self,
        function: str,
        symbol: Symbol,
        api_key: ApiKey,
        **params: str,
    ) -> dict[str, Any]:
        """Issue one upstream request and return the decoded JSON object.

        Raises:
            UpstreamUnavailableError: Transport failure or non-2xx status.
            MalformedPayloadError: 2xx body that is not a JSON object.
        """
        context = {"function": function, "symbol": symbol}
        query = {"function": function, "symbol": symbol, **params, "apikey": api_key}

        logger.debug("Requesting %s for %s", function, symbol)
        try:
            response = await self._client.get(self._config.base_url, params=query)
        except httpx.RequestError as e:
            # str(e) can embed the request URL, which holds the key
            raise UpstreamUnavailableError(
                f"{function} request for {symbol} failed: {type(e).__name__}",
                context={**context, "status_code": None, "error": type(e).__name__},
            ) from e

        if not response.is_success:
            raise UpstreamUnavailableError(
                f"HTTP {response.status_code} from provider for {function} {symbol}",
                context={**context, "status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                f"{function} response for {symbol} is not JSON",
                context={**context, "reason": "not_json"},
            ) from e

        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"{function} response for {symbol} is not a JSON object",
                context={**context, "reason": f"got {type(data).__name__}"},
            )
        return data
