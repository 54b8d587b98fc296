"""
Recommendation Store - the state/orchestration core

Owns filter criteria, pagination cursor, the accumulated list and the
auxiliary slots (detail, top, tickers, history). Every operation follows
the same sequence: mark its stream loading -> await the source -> commit
the new state (or an error descriptor) -> clear loading.

Each stream carries a request generation. A response is committed only if
no newer request was issued on that stream while it was in flight, so an
older response can never overwrite a newer one.
"""
import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from .domain import (
    FilterCriteria,
    HistoryEntry,
    PaginationCursor,
    Recommendation,
    RecommendationPage,
    RequestStatus,
    ResponseShapeError,
    StoreSnapshot,
    Stream,
    parse_records,
)
from .pagination import begin_fetch, merge_page, validate_page
from .ports import RecommendationSource

logger = logging.getLogger(__name__)

Listener = Callable[[StoreSnapshot], None]

# Error descriptors surfaced to consumers (raw transport detail is only logged)
LIST_ERROR = "Failed to fetch recommendations"
LOAD_MORE_ERROR = "Failed to load more recommendations"
DETAIL_ERROR = "Failed to fetch stock details"
HISTORY_ERROR = "Failed to fetch recommendation history"
TOP_ERROR = "Failed to fetch top stocks"
TICKERS_ERROR = "Failed to fetch tickers"


def _validate_ticker(ticker: str) -> str:
    if not isinstance(ticker, str) or not ticker.strip():
        raise ValueError("ticker must be a non-empty string")
    return ticker.strip()


def _first_record(body: Any, ticker: str) -> Recommendation:
    """Most recent recommendation from a `limit=1` response"""
    records = parse_records(body)
    if not records:
        raise ResponseShapeError(f"No recommendations found for {ticker}")
    return records[0]


def _parse_tickers(body: Any) -> tuple[str, ...]:
    if not isinstance(body, list):
        raise ResponseShapeError(f"Tickers response is not a list: {type(body).__name__}")
    if not all(isinstance(t, str) for t in body):
        raise ResponseShapeError("Tickers response contains non-string entries")
    return tuple(body)


class RecommendationStore:
    """Explicitly owned client-side state for the recommendation catalog"""

    def __init__(
        self,
        source: RecommendationSource,
        page_size: int = 20,
        top_limit: int = 20
    ):
        self.source = source
        self.page_size = page_size
        self.top_limit = top_limit
        self._state = StoreSnapshot(criteria=FilterCriteria(page_size=page_size))
        self._generations = {stream: 0 for stream in Stream}
        self._listeners: list[Listener] = []

    # -- Read access ------------------------------------------------------

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._state

    @property
    def recommendations(self) -> tuple[Recommendation, ...]:
        return self._state.recommendations

    @property
    def criteria(self) -> FilterCriteria:
        return self._state.criteria

    @property
    def cursor(self) -> PaginationCursor:
        return self._state.cursor

    @property
    def has_more(self) -> bool:
        return self._state.cursor.has_more

    @property
    def current_page(self) -> int:
        return self._state.cursor.page

    @property
    def current_stock(self) -> Optional[Recommendation]:
        return self._state.current_stock

    @property
    def top_stocks(self) -> tuple[Recommendation, ...]:
        return self._state.top_stocks

    @property
    def tickers(self) -> tuple[str, ...]:
        return self._state.tickers

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return self._state.history

    def status(self, stream: Stream) -> RequestStatus:
        return self._state.statuses[stream]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with a snapshot after every state change"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- State plumbing ---------------------------------------------------

    def _set(self, stream: Stream, status: RequestStatus, **changes: Any) -> None:
        statuses = dict(self._state.statuses)
        statuses[stream] = status
        self._state = replace(self._state, statuses=statuses, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _begin(self, stream: Stream) -> int:
        """Enter Loading, return this request's generation

        If a listener raises, the stream's status and generation are rolled
        back before the exception propagates and no request is issued.
        """
        previous = self._state
        self._generations[stream] += 1
        try:
            self._set(stream, RequestStatus(loading=True))
        except Exception:
            self._state = previous
            self._generations[stream] -= 1
            raise
        return self._generations[stream]

    def _commit(
        self,
        stream: Stream,
        generation: int,
        error: Optional[str] = None,
        **changes: Any
    ) -> bool:
        """Apply a response unless a newer request superseded it"""
        if generation != self._generations[stream]:
            logger.debug(
                f"Discarding stale {stream.value} response "
                f"(generation {generation}, latest {self._generations[stream]})"
            )
            return False
        self._set(stream, RequestStatus(loading=False, error=error), **changes)
        return True

    # -- List stream ------------------------------------------------------

    async def fetch_list(
        self,
        criteria: Optional[FilterCriteria] = None,
        page: int = 1,
        append: bool = False
    ) -> None:
        """
        Fetch a page of recommendations.

        A fresh fetch (append=False) adopts `criteria` and resets to page 1.
        An append reuses the active criteria and requests `page`; appending
        past the last page is a no-op once the service has reported there
        are no more pages. An append of page 1 always replaces the list.
        """
        validate_page(page)
        if criteria is None:
            criteria = FilterCriteria(page_size=self.page_size)

        if append and page > 1 and not self.has_more:
            logger.info(f"No more pages after page {self.current_page}, skipping append fetch")
            return

        resolved, resolved_page = begin_fetch(self.criteria, criteria, page, append)
        generation = self._begin(Stream.LIST)

        try:
            body = await self.source.list_recommendations(
                resolved.ticker,
                resolved.rating,
                resolved.page_size,
                resolved_page
            )
            result = RecommendationPage.from_body(body)
        except Exception as e:
            logger.warning(f"List fetch failed (page {resolved_page}, append={append}): {e}")
            self._commit(Stream.LIST, generation, error=LOAD_MORE_ERROR if append else LIST_ERROR)
            return

        self._commit(
            Stream.LIST,
            generation,
            recommendations=merge_page(self.recommendations, result.data, append, resolved_page),
            criteria=resolved,
            cursor=PaginationCursor(page=resolved_page, has_more=result.has_more),
        )

    async def load_more(self) -> None:
        """Fetch the next page with the active filter and append it"""
        if not self.has_more:
            logger.info("load_more called with no more pages available")
            return
        await self.fetch_list(self.criteria, self.current_page + 1, append=True)

    # -- Auxiliary streams ------------------------------------------------

    async def fetch_detail(self, ticker: str) -> None:
        """Select the most recent recommendation for `ticker`"""
        ticker = _validate_ticker(ticker)
        generation = self._begin(Stream.DETAIL)
        try:
            body = await self.source.latest_for_ticker(ticker)
            record = _first_record(body, ticker)
        except Exception as e:
            logger.warning(f"Detail fetch failed for {ticker}: {e}")
            self._commit(Stream.DETAIL, generation, error=DETAIL_ERROR, current_stock=None)
            return
        self._commit(Stream.DETAIL, generation, current_stock=record)

    async def fetch_history(self, ticker: str) -> None:
        """Load the recommendation history for `ticker` (latest entry)"""
        ticker = _validate_ticker(ticker)
        generation = self._begin(Stream.HISTORY)
        try:
            body = await self.source.latest_for_ticker(ticker)
            record = _first_record(body, ticker)
        except Exception as e:
            logger.warning(f"History fetch failed for {ticker}: {e}")
            self._commit(Stream.HISTORY, generation, error=HISTORY_ERROR, history=())
            return
        self._commit(
            Stream.HISTORY,
            generation,
            history=(HistoryEntry.from_recommendation(record),),
        )

    async def fetch_top(self, limit: Optional[int] = None) -> None:
        """Load the best recommendations; keeps the previous ones on error"""
        limit = self.top_limit if limit is None else limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        generation = self._begin(Stream.TOP)
        try:
            body = await self.source.best(limit)
            records = parse_records(body, key="best_recommendations")
        except Exception as e:
            logger.warning(f"Top stocks fetch failed: {e}")
            self._commit(Stream.TOP, generation, error=TOP_ERROR)
            return

        generated_at = body.get("generated_at")
        self._commit(
            Stream.TOP,
            generation,
            top_stocks=records,
            top_generated_at=str(generated_at) if generated_at else None,
        )

    async def fetch_tickers(self) -> None:
        """Load the known tickers; resets to empty on any failure"""
        generation = self._begin(Stream.TICKERS)
        try:
            body = await self.source.tickers()
            tickers = _parse_tickers(body)
        except Exception as e:
            logger.warning(f"Tickers fetch failed: {e}")
            self._commit(Stream.TICKERS, generation, error=TICKERS_ERROR, tickers=())
            return
        self._commit(Stream.TICKERS, generation, tickers=tickers)
