"""Tests for stock_checker.core.models."""

from datetime import date

import pytest
from pydantic import ValidationError

from stock_checker.core.models import (
    Bar,
    HistoryResult,
    Language,
    Outcome,
    OutcomeKind,
    PeriodKey,
    QuoteRecord,
)

pytestmark = pytest.mark.unit


class TestOutcome:
    def test_success(self):
        outcome = Outcome.success(42)
        assert outcome.is_ok
        assert outcome.kind is OutcomeKind.OK
        assert outcome.unwrap() == 42

    def test_failure(self):
        outcome = Outcome.failure(OutcomeKind.NOT_FOUND, "quote_not_found", "no data")
        assert not outcome.is_ok
        assert outcome.value is None
        assert (outcome.reason, outcome.detail) == ("quote_not_found", "no data")

    def test_failure_with_ok_kind_rejected(self):
        with pytest.raises(ValueError, match="non-OK"):
            Outcome.failure(OutcomeKind.OK, "whatever")

    def test_unwrap_failure_raises(self):
        with pytest.raises(ValueError, match="rate_limited"):
            Outcome.failure(OutcomeKind.RATE_LIMITED, "rate_limit_note").unwrap()

    def test_frozen(self):
        outcome = Outcome.success(1)
        with pytest.raises(AttributeError):
            outcome.kind = OutcomeKind.INVALID

    def test_closed_set(self):
        assert {k.value for k in OutcomeKind} == {
            "ok",
            "invalid",
            "not_found",
            "provider_rejected",
            "rate_limited",
            "upstream_unavailable",
            "malformed",
        }


class TestBar:
    def test_valid(self):
        bar = Bar(date=date(2024, 1, 5), open=1, high=2, low=0.5, close=1.5, volume=0)
        assert bar.volume == 0

    def test_negative_volume_rejected(self):
        with pytest.raises(ValidationError, match="volume"):
            Bar(date=date(2024, 1, 5), open=1, high=2, low=0.5, close=1.5, volume=-5)

    def test_frozen(self):
        bar = Bar(date=date(2024, 1, 5), open=1, high=2, low=0.5, close=1.5, volume=1)
        with pytest.raises(ValidationError):
            bar.close = 3


class TestRecords:
    def test_quote_volume_is_int(self, sample_quote):
        assert isinstance(sample_quote.volume, int)

    def test_quote_rejects_fractional_volume(self):
        with pytest.raises(ValidationError):
            QuoteRecord(
                symbol="AAPL", price=1, change=0, change_percent=0,
                high=1, low=1, volume=1.5, timestamp="2024-01-05",
            )

    def test_history_keeps_bar_order(self, sample_history):
        copy = HistoryResult.model_validate(sample_history.model_dump())
        assert copy.bars == sample_history.bars


class TestEnums:
    def test_period_keys(self):
        assert [p.value for p in PeriodKey] == ["1W", "1M", "3M", "6M", "1Y"]

    def test_languages(self):
        assert {lang.value for lang in Language} == {"ja", "en"}
