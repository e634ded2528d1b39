"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stock_checker.api.deps import AppState
from stock_checker.api.routes import router
from stock_checker.core.config import StockCheckerConfig, load_config
from stock_checker.core.exceptions import ConfigError, StockCheckerError
from stock_checker.market.client import AlphaVantageClient
from stock_checker.market.gateway import HistoryGateway, QuoteGateway


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    config = app.state.config
    client = AlphaVantageClient(config.provider)

    app.state.app_state = AppState(
        config=config,
        client=client,
        quote_gateway=QuoteGateway(client),
        history_gateway=HistoryGateway(client),
    )

    yield

    await client.close()


def create_app(config: StockCheckerConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without ``config`` (the uvicorn factory path) the configuration is
    loaded here, before the middleware that depends on it is installed.
    """
    import stock_checker

    config = config or load_config()

    app = FastAPI(
        title="Stock Checker API",
        description="Quotes and daily price history via Alpha Vantage",
        version=stock_checker.__version__,
        lifespan=lifespan,
    )

    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.api.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    @app.exception_handler(StockCheckerError)
    async def stock_checker_exception_handler(request: Request, exc: StockCheckerError):
        status_map = {
            ConfigError: 400,
        }
        status = status_map.get(type(exc), 500)
        return JSONResponse(
            status_code=status,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    return app
