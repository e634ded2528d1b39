"""stock_checker.search: quote-then-history search sequencing."""

from stock_checker.search.orchestrator import (
    TERMINAL_STATES,
    SearchOrchestrator,
    SearchState,
    SearchView,
)
from stock_checker.search.remote import RemoteGateway

__all__ = [
    "SearchOrchestrator",
    "SearchState",
    "SearchView",
    "TERMINAL_STATES",
    "RemoteGateway",
]
