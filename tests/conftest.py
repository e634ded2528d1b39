"""Shared pytest fixtures for stock-checker."""

from datetime import date, timedelta

import pytest

from stock_checker.core.config import APIConfig, PreferencesConfig, ProviderConfig, StockCheckerConfig
from stock_checker.core.models import Bar, HistoryResult, QuoteRecord

PROVIDER_URL = "https://www.alphavantage.co/query"


def daily_series_payload(dates: list[str], symbol: str = "AAPL") -> dict:
    """Build a TIME_SERIES_DAILY body with one bar per date string."""
    series = {}
    for i, d in enumerate(dates):
        base = 100.0 + i
        series[d] = {
            "1. open": f"{base:.4f}",
            "2. high": f"{base + 2:.4f}",
            "3. low": f"{base - 1:.4f}",
            "4. close": f"{base + 1:.4f}",
            "5. volume": str(1_000_000 + i),
        }
    return {
        "Meta Data": {
            "1. Information": "Daily Prices (open, high, low, close) and Volumes",
            "2. Symbol": symbol,
            "3. Last Refreshed": max(dates) if dates else "",
            "4. Output Size": "Compact",
            "5. Time Zone": "US/Eastern",
        },
        "Time Series (Daily)": series,
    }


def make_bars(newest: date, count: int) -> list[Bar]:
    """Consecutive daily bars ending at ``newest``, newest first."""
    return [
        Bar(
            date=newest - timedelta(days=i),
            open=100.0,
            high=101.0,
            low=99.0,
            close=100.5,
            volume=1000 + i,
        )
        for i in range(count)
    ]


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(base_url=PROVIDER_URL, request_timeout=5)


@pytest.fixture
def app_config(tmp_path) -> StockCheckerConfig:
    return StockCheckerConfig(
        provider=ProviderConfig(base_url=PROVIDER_URL, request_timeout=5),
        api=APIConfig(default_language="en"),
        preferences=PreferencesConfig(path=str(tmp_path / "prefs.json")),
    )


@pytest.fixture
def global_quote_payload() -> dict:
    return {
        "Global Quote": {
            "01. symbol": "AAPL",
            "02. open": "151.0000",
            "03. high": "152.1000",
            "04. low": "149.8000",
            "05. price": "150.2500",
            "06. volume": "51234567",
            "07. latest trading day": "2024-01-05",
            "08. previous close": "151.5000",
            "09. change": "-1.2500",
            "10. change percent": "-0.8200%",
        }
    }


@pytest.fixture
def daily_payload() -> dict:
    return daily_series_payload(
        ["2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05", "2024-01-08"]
    )


@pytest.fixture
def sample_quote() -> QuoteRecord:
    return QuoteRecord(
        symbol="AAPL",
        price=150.25,
        change=-1.25,
        change_percent=-0.82,
        high=152.1,
        low=149.8,
        volume=51234567,
        timestamp="2024-01-05",
    )


@pytest.fixture
def sample_history() -> HistoryResult:
    return HistoryResult(
        symbol="AAPL",
        bars=make_bars(date(2024, 1, 8), 10),
        last_refreshed="2024-01-08",
    )


@pytest.fixture
def series_payload_factory():
    return daily_series_payload


@pytest.fixture
def bars_factory():
    return make_bars
