"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from stock_checker.core.config import StockCheckerConfig
from stock_checker.market.client import AlphaVantageClient
from stock_checker.market.gateway import HistoryGateway, QuoteGateway


@dataclass
class AppState:
    """Shared application state, attached to app.state during lifespan."""

    config: StockCheckerConfig
    client: AlphaVantageClient
    quote_gateway: QuoteGateway
    history_gateway: HistoryGateway


def get_app_state(request: Request) -> AppState:
    """Dependency: retrieve AppState from the request."""
    return request.app.state.app_state


def get_config(request: Request) -> StockCheckerConfig:
    """Dependency: retrieve config."""
    return request.app.state.app_state.config


def get_quote_gateway(request: Request) -> QuoteGateway:
    return request.app.state.app_state.quote_gateway


def get_history_gateway(request: Request) -> HistoryGateway:
    return request.app.state.app_state.history_gateway
