"""Trailing-window selection of daily bars for charting."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from stock_checker.core.models import Bar, Outcome, OutcomeKind, PeriodKey

PERIOD_DAYS: dict[PeriodKey, int] = {
    PeriodKey.ONE_WEEK: 7,
    PeriodKey.ONE_MONTH: 30,
    PeriodKey.THREE_MONTHS: 90,
    PeriodKey.SIX_MONTHS: 180,
    PeriodKey.ONE_YEAR: 365,
}

DEFAULT_PERIOD = PeriodKey.ONE_MONTH


def parse_period(value: str | None) -> PeriodKey | None:
    """Return the PeriodKey spelled by ``value``, or None if unrecognised."""
    if value is None:
        return None
    try:
        return PeriodKey(value.strip().upper())
    except ValueError:
        return None


def window_by_period(
    bars: Sequence[Bar],
    period: PeriodKey | str,
    now: date | datetime,
) -> Outcome[list[Bar]]:
    """Select the bars within ``period`` calendar days of ``now``, oldest first.

    A bar dated exactly ``now - days`` is kept. An empty result is OK; the
    caller tells "nothing in this window" from "nothing fetched" by looking
    at ``bars`` itself. Input order does not matter, so filtering an
    already-windowed list again with the same arguments returns it as is.

    Unknown periods yield INVALID; there is no fallback to the full list.
    """
    key = period if isinstance(period, PeriodKey) else parse_period(period)
    if key is None:
        return Outcome.failure(OutcomeKind.INVALID, "invalid_period", f"unknown period {period!r}")

    today = now.date() if isinstance(now, datetime) else now
    cutoff = today - timedelta(days=PERIOD_DAYS[key])
    kept = [bar for bar in bars if bar.date >= cutoff]
    return Outcome.success(sorted(kept, key=lambda b: b.date))
