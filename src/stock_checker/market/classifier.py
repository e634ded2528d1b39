"""Classification of Alpha Vantage's non-data response bodies.

Alpha Vantage answers HTTP 200 for errors and throttling as well as for
data, signalling the former with a body holding a single well-known key.
Both gateways run ``classify`` on every decoded body before touching any
data field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stock_checker.core.models import OutcomeKind


@dataclass(frozen=True)
class Classification:
    """A recognised upstream signal: the outcome it maps to and why."""

    kind: OutcomeKind
    reason: str
    signal_key: str


# Checked top to bottom; the first key present decides the outcome.
SIGNAL_PRIORITY: tuple[Classification, ...] = (
    Classification(OutcomeKind.PROVIDER_REJECTED, "invalid_symbol", "Error Message"),
    Classification(OutcomeKind.RATE_LIMITED, "rate_limit_note", "Note"),
    Classification(OutcomeKind.RATE_LIMITED, "rate_limit_per_second", "Information"),
)


def classify(payload: Any) -> Classification | None:
    """Return the first matching upstream signal in ``payload``, if any.

    ``None`` means the body carries no error signal and the caller should
    go on to shape-specific extraction. Non-mapping payloads also return
    ``None``; the caller's shape check reports them as malformed.
    """
    if not isinstance(payload, dict):
        return None
    for candidate in SIGNAL_PRIORITY:
        if candidate.signal_key in payload:
            return candidate
    return None
