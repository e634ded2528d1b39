"""Two-step search choreography: quote first, history after a fixed delay.

The provider throttles at about one request per second, so the history
request for a search is only issued once the quote has succeeded and the
configured delay has elapsed. A failed quote ends the search; a failed
history does not undo the quote.

Several searches may be in flight at once (the user can search again
before the previous one finishes). Each gets a ``search_id``; only the
most recent one may write ``SearchOrchestrator.current``, and an older
search that is overtaken before its history request does not send it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum

from stock_checker.core.config import MIN_HISTORY_DELAY_SECONDS
from stock_checker.core.models import ApiKey, HistoryResult, Outcome, QuoteRecord, Symbol

logger = logging.getLogger(__name__)

QuoteFetcher = Callable[[Symbol, ApiKey], Awaitable[Outcome[QuoteRecord]]]
HistoryFetcher = Callable[[Symbol, ApiKey], Awaitable[Outcome[HistoryResult]]]
Sleeper = Callable[[float], Awaitable[None]]


class SearchState(StrEnum):
    """Lifecycle of one search."""

    IDLE = "idle"
    QUOTE_LOADING = "quote_loading"
    QUOTE_READY = "quote_ready"
    QUOTE_FAILED = "quote_failed"
    HISTORY_SCHEDULED = "history_scheduled"
    HISTORY_LOADING = "history_loading"
    HISTORY_READY = "history_ready"
    HISTORY_FAILED = "history_failed"


_ALLOWED: dict[SearchState, frozenset[SearchState]] = {
    SearchState.IDLE: frozenset({SearchState.QUOTE_LOADING}),
    SearchState.QUOTE_LOADING: frozenset({SearchState.QUOTE_READY, SearchState.QUOTE_FAILED}),
    SearchState.QUOTE_READY: frozenset({SearchState.HISTORY_SCHEDULED}),
    SearchState.QUOTE_FAILED: frozenset(),
    SearchState.HISTORY_SCHEDULED: frozenset({SearchState.HISTORY_LOADING}),
    SearchState.HISTORY_LOADING: frozenset(
        {SearchState.HISTORY_READY, SearchState.HISTORY_FAILED}
    ),
    SearchState.HISTORY_READY: frozenset(),
    SearchState.HISTORY_FAILED: frozenset(),
}

TERMINAL_STATES = frozenset(s for s, nxt in _ALLOWED.items() if not nxt)


@dataclass
class SearchView:
    """What the presentation layer shows for one search."""

    search_id: int
    symbol: Symbol
    state: SearchState = SearchState.IDLE
    quote: Outcome[QuoteRecord] | None = None
    history: Outcome[HistoryResult] | None = None
    superseded: bool = False
    transitions: list[SearchState] = field(default_factory=list)

    @property
    def history_requested(self) -> bool:
        return SearchState.HISTORY_LOADING in self.transitions

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES or self.superseded

    def advance(self, new_state: SearchState) -> None:
        if new_state not in _ALLOWED[self.state]:
            raise RuntimeError(f"illegal search transition {self.state} -> {new_state}")
        self.state = new_state
        self.transitions.append(new_state)


class SearchOrchestrator:
    """Runs searches and keeps the most recent one in ``current``.

    Parameters
    ----------
    fetch_quote, fetch_history : async callables
        ``(symbol, api_key) -> Outcome``; a ``QuoteGateway``/``HistoryGateway``
        pair or a ``RemoteGateway``.
    delay : float
        Seconds between a successful quote and the history request. At
        least one second.
    sleep : async callable
        Injected so tests can observe the delay without waiting.
    on_change : callable, optional
        Called with the current ``SearchView`` after each of its transitions.
    """

    def __init__(
        self,
        fetch_quote: QuoteFetcher,
        fetch_history: HistoryFetcher,
        delay: float = MIN_HISTORY_DELAY_SECONDS,
        sleep: Sleeper = asyncio.sleep,
        on_change: Callable[[SearchView], None] | None = None,
    ) -> None:
        if delay < MIN_HISTORY_DELAY_SECONDS:
            raise ValueError(f"delay must be >= {MIN_HISTORY_DELAY_SECONDS} seconds")
        self._fetch_quote = fetch_quote
        self._fetch_history = fetch_history
        self._delay = delay
        self._sleep = sleep
        self._on_change = on_change
        self._latest_id = 0
        self.current: SearchView | None = None

    def is_current(self, view: SearchView) -> bool:
        return view.search_id == self._latest_id

    async def search(self, symbol: Symbol, api_key: ApiKey) -> SearchView:
        """Run one search to completion and return its view.

        The returned view is this invocation's own; whether it is still the
        one on display is ``is_current(view)``.
        """
        self._latest_id += 1
        view = SearchView(search_id=self._latest_id, symbol=symbol)
        self.current = view

        self._advance(view, SearchState.QUOTE_LOADING)
        view.quote = await self._fetch_quote(symbol, api_key)
        if self._overtaken(view, "quote"):
            return view
        if not view.quote.is_ok:
            self._advance(view, SearchState.QUOTE_FAILED)
            return view
        self._advance(view, SearchState.QUOTE_READY)

        self._advance(view, SearchState.HISTORY_SCHEDULED)
        await self._sleep(self._delay)
        if self._overtaken(view, "history delay"):
            return view

        self._advance(view, SearchState.HISTORY_LOADING)
        view.history = await self._fetch_history(symbol, api_key)
        if self._overtaken(view, "history"):
            return view
        self._advance(
            view,
            SearchState.HISTORY_READY if view.history.is_ok else SearchState.HISTORY_FAILED,
        )
        return view

    def _overtaken(self, view: SearchView, stage: str) -> bool:
        if self.is_current(view):
            return False
        view.superseded = True
        logger.info(
            "Search %d for %s superseded after %s; result discarded",
            view.search_id, view.symbol, stage,
        )
        return True

    def _advance(self, view: SearchView, new_state: SearchState) -> None:
        view.advance(new_state)
        logger.debug("Search %d (%s): %s", view.search_id, view.symbol, new_state)
        if self._on_change is not None:
            self._on_change(view)
