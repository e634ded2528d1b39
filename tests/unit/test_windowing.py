"""Tests for stock_checker.market.windowing."""

from datetime import date, datetime

import pytest

from stock_checker.core.models import OutcomeKind, PeriodKey
from stock_checker.market.transforms import DailySeriesAdapter
from stock_checker.market.windowing import (
    DEFAULT_PERIOD,
    PERIOD_DAYS,
    parse_period,
    window_by_period,
)

pytestmark = pytest.mark.unit


class TestParsePeriod:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1W", PeriodKey.ONE_WEEK),
            ("1m", PeriodKey.ONE_MONTH),
            (" 3M ", PeriodKey.THREE_MONTHS),
            ("6M", PeriodKey.SIX_MONTHS),
            ("1y", PeriodKey.ONE_YEAR),
        ],
    )
    def test_known(self, text, expected):
        assert parse_period(text) is expected

    @pytest.mark.parametrize("text", [None, "", "2W", "MAX", "30"])
    def test_unknown(self, text):
        assert parse_period(text) is None

    def test_default_is_one_month(self):
        assert DEFAULT_PERIOD is PeriodKey.ONE_MONTH


class TestWindowByPeriod:
    def test_one_week_three_days_after_newest(self, daily_payload):
        bars = DailySeriesAdapter().adapt(daily_payload["Time Series (Daily)"])
        now = date(2024, 1, 11)  # three days after the newest bar

        outcome = window_by_period(bars, "1W", now)

        assert outcome.is_ok
        assert [b.date for b in outcome.unwrap()] == [
            date(2024, 1, 4),
            date(2024, 1, 5),
            date(2024, 1, 8),
        ]

    def test_cutoff_day_is_inclusive(self, bars_factory):
        bars = bars_factory(date(2024, 3, 31), 40)
        kept = window_by_period(bars, PeriodKey.ONE_MONTH, date(2024, 3, 31)).unwrap()
        assert kept[0].date == date(2024, 3, 1)
        assert len(kept) == 31

    @pytest.mark.parametrize("period", list(PeriodKey))
    def test_every_bar_is_inside_window(self, bars_factory, period):
        now = date(2024, 6, 30)
        bars = bars_factory(now, 400)

        kept = window_by_period(bars, period, now).unwrap()

        assert len(kept) == PERIOD_DAYS[period] + 1
        assert all((now - b.date).days <= PERIOD_DAYS[period] for b in kept)

    def test_output_ascending(self, sample_history):
        kept = window_by_period(sample_history.bars, "1M", date(2024, 1, 8)).unwrap()
        dates = [b.date for b in kept]
        assert dates == sorted(dates)

    def test_idempotent(self, bars_factory):
        now = date(2024, 2, 15)
        bars = bars_factory(now, 60)
        once = window_by_period(bars, "1M", now).unwrap()
        twice = window_by_period(once, "1M", now).unwrap()
        assert twice == once

    def test_accepts_datetime(self, sample_history):
        from_date = window_by_period(sample_history.bars, "1W", date(2024, 1, 8)).unwrap()
        from_dt = window_by_period(
            sample_history.bars, "1W", datetime(2024, 1, 8, 23, 59)
        ).unwrap()
        assert from_dt == from_date

    def test_empty_window_is_ok(self, sample_history):
        outcome = window_by_period(sample_history.bars, "1W", date(2025, 1, 1))
        assert outcome.is_ok
        assert outcome.unwrap() == []

    def test_empty_input_is_ok(self):
        assert window_by_period([], "1Y", date(2024, 1, 1)).unwrap() == []

    @pytest.mark.parametrize("period", ["5D", "", "all"])
    def test_unknown_period_is_invalid(self, sample_history, period):
        outcome = window_by_period(sample_history.bars, period, date(2024, 1, 8))
        assert outcome.kind == OutcomeKind.INVALID
        assert outcome.reason == "invalid_period"
