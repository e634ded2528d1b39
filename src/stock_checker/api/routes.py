"""FastAPI route definitions for the stock-checker API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

import stock_checker
from stock_checker.api.deps import get_config, get_history_gateway, get_quote_gateway
from stock_checker.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HistoryResponse,
    QuoteResponse,
)
from stock_checker.core.config import StockCheckerConfig
from stock_checker.core.models import Outcome, OutcomeKind
from stock_checker.i18n import translate
from stock_checker.market.gateway import HistoryGateway, QuoteGateway

router = APIRouter()

OUTCOME_STATUS: dict[OutcomeKind, int] = {
    OutcomeKind.INVALID: 400,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.PROVIDER_REJECTED: 404,
    OutcomeKind.RATE_LIMITED: 429,
    OutcomeKind.UPSTREAM_UNAVAILABLE: 500,
    OutcomeKind.MALFORMED: 500,
}

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorResponse} for status in sorted(set(OUTCOME_STATUS.values()))
}


def error_response(outcome: Outcome[Any], language: str) -> JSONResponse:
    """Render a failed Outcome as ``{"error", "kind", "reason"}`` with its status."""
    reason = outcome.reason or "upstream_error"
    body = ErrorResponse(error=translate(language, reason), kind=outcome.kind, reason=reason)
    return JSONResponse(
        status_code=OUTCOME_STATUS[outcome.kind],
        content=body.model_dump(mode="json", exclude_none=True),
    )


# -- Health --


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe. Does not contact the provider."""
    return HealthResponse(status="ok", version=stock_checker.__version__)


# -- Market data --


@router.get("/quote", response_model=QuoteResponse, responses=_ERROR_RESPONSES)
async def get_quote(
    symbol: str = Query("", description="Ticker symbol, e.g. AAPL"),
    api_key: str = Query("", alias="apiKey", description="Alpha Vantage API key"),
    lang: str | None = Query(None, description="Message language: ja or en"),
    gateway: QuoteGateway = Depends(get_quote_gateway),
    config: StockCheckerConfig = Depends(get_config),
):
    """Current quote for a symbol."""
    outcome = await gateway.fetch_quote(symbol, api_key)
    if not outcome.is_ok:
        return error_response(outcome, lang or config.api.default_language)
    return QuoteResponse.from_record(outcome.unwrap())


@router.get("/history", response_model=HistoryResponse, responses=_ERROR_RESPONSES)
async def get_history(
    symbol: str = Query("", description="Ticker symbol, e.g. AAPL"),
    api_key: str = Query("", alias="apiKey", description="Alpha Vantage API key"),
    lang: str | None = Query(None, description="Message language: ja or en"),
    gateway: HistoryGateway = Depends(get_history_gateway),
    config: StockCheckerConfig = Depends(get_config),
):
    """Last 100 trading days for a symbol, newest first."""
    outcome = await gateway.fetch_history(symbol, api_key)
    if not outcome.is_ok:
        return error_response(outcome, lang or config.api.default_language)
    return HistoryResponse.from_result(outcome.unwrap())
