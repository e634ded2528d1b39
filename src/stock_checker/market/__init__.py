"""Market data gateway for the Alpha Vantage provider.

Architecture
------------
Each lookup is one upstream call followed by a fixed pipeline:

    AlphaVantageClient → classify() → Adapter → Outcome

- ``classify`` recognises the provider's HTTP-200 error and throttle
  bodies before any data field is read.
- ``GlobalQuoteAdapter`` / ``DailySeriesAdapter`` map the provider's
  numbered field names onto ``QuoteRecord`` / ``Bar``.
- ``QuoteGateway`` / ``HistoryGateway`` compose the three and return an
  ``Outcome`` instead of raising.
- ``window_by_period`` trims a history to a chart period.
"""

from stock_checker.market.classifier import SIGNAL_PRIORITY, Classification, classify
from stock_checker.market.client import AlphaVantageClient
from stock_checker.market.gateway import COMPACT_OUTPUT, HistoryGateway, QuoteGateway
from stock_checker.market.transforms import DailySeriesAdapter, GlobalQuoteAdapter
from stock_checker.market.windowing import (
    DEFAULT_PERIOD,
    PERIOD_DAYS,
    parse_period,
    window_by_period,
)

__all__ = [
    # Classification
    "Classification",
    "SIGNAL_PRIORITY",
    "classify",
    # Transport
    "AlphaVantageClient",
    # Adapters
    "GlobalQuoteAdapter",
    "DailySeriesAdapter",
    # Gateways
    "QuoteGateway",
    "HistoryGateway",
    "COMPACT_OUTPUT",
    # Windowing
    "PERIOD_DAYS",
    "DEFAULT_PERIOD",
    "parse_period",
    "window_by_period",
]
