"""
Shared fixtures: an in-memory RecommendationSource and record factories.
"""
import asyncio
from typing import Any, Optional

import pytest

from mcp_stock_recs.core.ports import RecommendationSource


class FakeSource(RecommendationSource):
    """Scripted source: each operation pops its next queued response.

    A queued exception is raised, a queued Future is awaited (lets tests
    control completion order), anything else is returned as the body.
    """

    def __init__(self):
        self.responses: dict[str, list[Any]] = {
            "list": [], "latest": [], "best": [], "tickers": [], "health": []
        }
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def queue(self, op: str, *items: Any) -> "FakeSource":
        self.responses[op].extend(items)
        return self

    async def _next(self, op: str) -> Any:
        item = self.responses[op].pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, asyncio.Future):
            return await item
        return item

    async def list_recommendations(self, ticker: Optional[str], rating: Optional[str], limit: int, page: int) -> Any:
        self.calls.append(("list", {"ticker": ticker, "rating": rating, "limit": limit, "page": page}))
        return await self._next("list")

    async def latest_for_ticker(self, ticker: str) -> Any:
        self.calls.append(("latest", {"ticker": ticker}))
        return await self._next("latest")

    async def best(self, limit: int) -> Any:
        self.calls.append(("best", {"limit": limit}))
        return await self._next("best")

    async def tickers(self) -> Any:
        self.calls.append(("tickers", {}))
        return await self._next("tickers")

    async def health(self) -> Any:
        self.calls.append(("health", {}))
        return await self._next("health")


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def make_rec():
    """Factory for wire-format recommendation records"""
    def _make(ticker: str = "AAPL", time: str = "2025-01-15T00:00:00Z", **overrides: Any) -> dict[str, Any]:
        record = {
            "ticker": ticker,
            "company": f"{ticker} Inc.",
            "rating_from": "Neutral",
            "rating_to": "Buy",
            "target_from": "150.00",
            "target_to": "175.00",
            "brokerage": "Goldman Sachs",
            "action": "upgraded by",
            "time": time,
        }
        record.update(overrides)
        return record
    return _make
