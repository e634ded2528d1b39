"""Pydantic data models: the system's type contracts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

# --- Type Aliases ---

Symbol = str
ApiKey = str

T = TypeVar("T")

# --- Enumerations ---


class OutcomeKind(StrEnum):
    """Closed set of results a gateway call can produce."""

    OK = "ok"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    PROVIDER_REJECTED = "provider_rejected"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    MALFORMED = "malformed"


class PeriodKey(StrEnum):
    """Chart period selectors."""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"


class Language(StrEnum):
    """Supported UI languages."""

    JA = "ja"
    EN = "en"


class Theme(StrEnum):
    """Supported colour themes."""

    LIGHT = "light"
    DARK = "dark"


# --- Market Data Models ---


class QuoteRecord(BaseModel):
    """Current quote for one symbol, as reported by the provider."""

    model_config = ConfigDict(frozen=True)

    symbol: Symbol
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    volume: int
    timestamp: str  # provider's "latest trading day", not interpreted


class Bar(BaseModel):
    """One trading day's OHLCV record."""

    model_config = ConfigDict(frozen=True)

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int

    @field_validator("volume")
    @classmethod
    def volume_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"volume must be >= 0, got {v}")
        return v


class HistoryResult(BaseModel):
    """Daily bars for one symbol, newest first."""

    model_config = ConfigDict(frozen=True)

    symbol: Symbol
    bars: list[Bar]
    last_refreshed: str


# --- Outcome ---


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged result of a gateway call, returned instead of raising.

    ``reason`` is a translation key naming the user-facing message for a
    failure; ``detail`` carries optional free text (e.g. a server's own
    error string).
    """

    kind: OutcomeKind
    value: T | None = None
    reason: str | None = None
    detail: str | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(kind=OutcomeKind.OK, value=value)

    @classmethod
    def failure(
        cls, kind: OutcomeKind, reason: str, detail: str | None = None
    ) -> Outcome[T]:
        if kind == OutcomeKind.OK:
            raise ValueError("failure() requires a non-OK kind")
        return cls(kind=kind, reason=reason, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.kind == OutcomeKind.OK

    def unwrap(self) -> T:
        """Return the value of an OK outcome.

        Raises:
            ValueError: If the outcome is a failure.
        """
        if self.kind != OutcomeKind.OK:
            raise ValueError(f"cannot unwrap {self.kind} outcome ({self.reason})")
        return self.value  # type: ignore[return-value]
