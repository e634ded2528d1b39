"""Client for a running stock-checker API, speaking in Outcomes.

Lets the SearchOrchestrator drive a server exactly as it drives the
in-process gateways.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from stock_checker.api.schemas import ErrorResponse, HistoryResponse, QuoteResponse
from stock_checker.core.models import (
    ApiKey,
    HistoryResult,
    Outcome,
    OutcomeKind,
    QuoteRecord,
    Symbol,
)
from stock_checker.market.gateway import validate_request

logger = logging.getLogger(__name__)

# Fallback when an error body does not name its kind and reason
_STATUS_OUTCOMES: dict[int, tuple[OutcomeKind, str]] = {
    400: (OutcomeKind.INVALID, "missing_symbol"),
    404: (OutcomeKind.NOT_FOUND, "quote_not_found"),
    429: (OutcomeKind.RATE_LIMITED, "rate_limit_note"),
}


class RemoteGateway:
    """Fetches quotes and histories from ``{base_url}/api/...``."""

    def __init__(
        self,
        base_url: str,
        language: str | None = None,
        http: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._language = language
        self._owns_http = http is None
        self._client = http or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> RemoteGateway:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._client.aclose()

    async def fetch_quote(self, symbol: Symbol, api_key: ApiKey) -> Outcome[QuoteRecord]:
        result = await self._get("/api/quote", symbol, api_key)
        if not result.is_ok:
            return Outcome.failure(result.kind, result.reason, result.detail)
        try:
            return Outcome.success(QuoteResponse.model_validate(result.unwrap()).to_record())
        except ValidationError as e:
            return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload", str(e))

    async def fetch_history(self, symbol: Symbol, api_key: ApiKey) -> Outcome[HistoryResult]:
        result = await self._get("/api/history", symbol, api_key)
        if not result.is_ok:
            return Outcome.failure(result.kind, result.reason, result.detail)
        try:
            return Outcome.success(HistoryResponse.model_validate(result.unwrap()).to_result())
        except ValidationError as e:
            return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload", str(e))

    async def _get(self, path: str, symbol: Symbol, api_key: ApiKey) -> Outcome[Any]:
        invalid = validate_request(symbol, api_key)
        if invalid is not None:
            return invalid

        params = {"symbol": symbol.strip().upper(), "apiKey": api_key}
        if self._language:
            params["lang"] = self._language

        try:
            response = await self._client.get(f"{self._base_url}{path}", params=params)
        except httpx.RequestError as e:
            logger.warning("Server unreachable for %s %s: %s", path, symbol, type(e).__name__)
            return Outcome.failure(
                OutcomeKind.UPSTREAM_UNAVAILABLE, "upstream_error", type(e).__name__
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            if not isinstance(body, dict):
                return Outcome.failure(OutcomeKind.MALFORMED, "malformed_payload")
            return Outcome.success(body)

        logger.info("Server answered %d for %s %s", response.status_code, path, symbol)
        return _failure_from(response.status_code, body)


def _failure_from(status_code: int, body: Any) -> Outcome[Any]:
    """Rebuild the server's Outcome from an error body.

    Uses the body's ``kind`` and ``reason`` when both are present and valid;
    otherwise falls back to what the status code alone implies.
    """
    kind, reason = _STATUS_OUTCOMES.get(
        status_code, (OutcomeKind.UPSTREAM_UNAVAILABLE, "upstream_error")
    )
    if not isinstance(body, dict):
        return Outcome.failure(kind, reason)

    try:
        error = ErrorResponse.model_validate(body)
    except ValidationError:
        return Outcome.failure(kind, reason)
    if error.kind is not None and error.kind != OutcomeKind.OK and error.reason:
        kind, reason = error.kind, error.reason
    return Outcome.failure(kind, reason, error.error)
