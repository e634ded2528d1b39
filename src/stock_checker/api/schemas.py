"""API-specific request/response schemas (Pydantic v2).

Wire names are camelCase; Python attributes stay snake_case.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from stock_checker.core.models import Bar, HistoryResult, OutcomeKind, QuoteRecord


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# -- Error --


class ErrorResponse(BaseModel):
    """Standard error envelope.

    ``error`` is the translated message. Market-data failures also carry
    the Outcome ``kind`` and untranslated ``reason`` so a client can rebuild
    the exact Outcome.
    """

    error: str
    kind: OutcomeKind | None = None
    reason: str | None = None
    detail: str | None = None


# -- Quote --


class QuoteResponse(_WireModel):
    """Current quote in API response format."""

    symbol: str
    price: float
    change: float
    change_percent: float = Field(alias="changePercent")
    high: float
    low: float
    volume: int
    timestamp: str

    @classmethod
    def from_record(cls, record: QuoteRecord) -> QuoteResponse:
        return cls.model_validate(record.model_dump())

    def to_record(self) -> QuoteRecord:
        return QuoteRecord.model_validate(self.model_dump())


# -- History --


class BarResponse(BaseModel):
    """One daily bar in API response format."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


class HistoryResponse(_WireModel):
    """Daily history, ``data`` sorted newest first."""

    symbol: str
    data: list[BarResponse]
    last_refreshed: str = Field(alias="lastRefreshed")

    @classmethod
    def from_result(cls, result: HistoryResult) -> HistoryResponse:
        return cls(
            symbol=result.symbol,
            data=[BarResponse.model_validate(b.model_dump()) for b in result.bars],
            last_refreshed=result.last_refreshed,
        )

    def to_result(self) -> HistoryResult:
        return HistoryResult(
            symbol=self.symbol,
            bars=[Bar.model_validate(b.model_dump()) for b in self.data],
            last_refreshed=self.last_refreshed,
        )


# -- Health --


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    status: str = "ok"
    version: str
