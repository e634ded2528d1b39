"""Adapters from Alpha Vantage JSON shapes to the canonical records.

Both adapters assume the body has already passed the error classifier and
the gateway's presence checks; anything still missing or unparseable is a
``MalformedPayloadError``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from stock_checker.core.exceptions import MalformedPayloadError
from stock_checker.core.models import Bar, QuoteRecord

# GLOBAL_QUOTE field names
_QUOTE_SYMBOL = "01. symbol"
_QUOTE_HIGH = "03. high"
_QUOTE_LOW = "04. low"
_QUOTE_PRICE = "05. price"
_QUOTE_VOLUME = "06. volume"
_QUOTE_LATEST_DAY = "07. latest trading day"
_QUOTE_CHANGE = "09. change"
_QUOTE_CHANGE_PERCENT = "10. change percent"

# TIME_SERIES_DAILY per-day field names
_BAR_OPEN = "1. open"
_BAR_HIGH = "2. high"
_BAR_LOW = "3. low"
_BAR_CLOSE = "4. close"
_BAR_VOLUME = "5. volume"


def _require(fields: dict[str, Any], key: str) -> Any:
    if key not in fields or fields[key] is None:
        raise MalformedPayloadError(
            f"Missing field {key!r}", context={"reason": "missing_field", "field": key}
        )
    return fields[key]


def _to_float(fields: dict[str, Any], key: str, suffix: str = "") -> float:
    raw = _require(fields, key)
    text = str(raw).strip()
    if suffix:
        text = text.removesuffix(suffix)
    try:
        return float(text)
    except ValueError as e:
        raise MalformedPayloadError(
            f"Field {key!r} is not a number: {raw!r}",
            context={"reason": "bad_number", "field": key},
        ) from e


def _to_int(fields: dict[str, Any], key: str) -> int:
    raw = _require(fields, key)
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise MalformedPayloadError(
            f"Field {key!r} is not an integer: {raw!r}",
            context={"reason": "bad_integer", "field": key},
        ) from e


def parse_calendar_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``, tolerating non-zero-padded month and day."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as e:
        raise MalformedPayloadError(
            f"Not a calendar date: {value!r}",
            context={"reason": "bad_date", "value": value},
        ) from e


class GlobalQuoteAdapter:
    """Transforms a ``Global Quote`` object into a QuoteRecord."""

    def adapt(self, quote: dict[str, Any]) -> QuoteRecord:
        return QuoteRecord(
            symbol=str(_require(quote, _QUOTE_SYMBOL)),
            price=_to_float(quote, _QUOTE_PRICE),
            change=_to_float(quote, _QUOTE_CHANGE),
            change_percent=_to_float(quote, _QUOTE_CHANGE_PERCENT, suffix="%"),
            high=_to_float(quote, _QUOTE_HIGH),
            low=_to_float(quote, _QUOTE_LOW),
            volume=_to_int(quote, _QUOTE_VOLUME),
            timestamp=str(_require(quote, _QUOTE_LATEST_DAY)),
        )


class DailySeriesAdapter:
    """Transforms a ``Time Series (Daily)`` map into Bar records.

    Parameters
    ----------
    series : dict
        Date string → OHLCV field map, exactly as the provider sends it.

    Returns
    -------
    list[Bar]
        Sorted by calendar date, newest first. Dates are unique.
    """

    def adapt(self, series: dict[str, Any]) -> list[Bar]:
        bars: dict[date, Bar] = {}
        for raw_date, fields in series.items():
            if not isinstance(fields, dict):
                raise MalformedPayloadError(
                    f"Series entry for {raw_date!r} is not an object",
                    context={"reason": "bad_entry", "value": raw_date},
                )
            day = parse_calendar_date(raw_date)
            if day in bars:
                raise MalformedPayloadError(
                    f"Duplicate series date {day.isoformat()}",
                    context={"reason": "duplicate_date", "value": raw_date},
                )
            try:
                bars[day] = Bar(
                    date=day,
                    open=_to_float(fields, _BAR_OPEN),
                    high=_to_float(fields, _BAR_HIGH),
                    low=_to_float(fields, _BAR_LOW),
                    close=_to_float(fields, _BAR_CLOSE),
                    volume=_to_int(fields, _BAR_VOLUME),
                )
            except ValidationError as e:
                raise MalformedPayloadError(
                    f"Invalid bar for {raw_date!r}: {e.errors()[0]['msg']}",
                    context={"reason": "invalid_bar", "value": raw_date},
                ) from e

        return sorted(bars.values(), key=lambda b: b.date, reverse=True)
