"""
MCP Tool Handlers

Shared handlers for MCP tools that drive the recommendation store.
Used by the stdio server, the HTTP/SSE server and the CLI.
"""
from dataclasses import asdict
from typing import Any, Optional

from ...container import Container
from ...core import FilterCriteria, Recommendation, Stream


def _rec(rec: Recommendation) -> dict[str, Any]:
    return asdict(rec)


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    @property
    def store(self):
        return self.container.store

    def _list_result(self, appended: Optional[int] = None) -> dict[str, Any]:
        store = self.store
        result = {
            "success": True,
            "recommendations": [_rec(r) for r in store.recommendations],
            "count": len(store.recommendations),
            "page": store.current_page,
            "has_more": store.has_more,
            "filters": {
                "ticker": store.criteria.ticker,
                "rating": store.criteria.rating,
                "limit": store.criteria.page_size,
            },
        }
        if appended is not None:
            result["appended"] = appended
        return result

    async def fetch_recommendations(
        self,
        ticker: Optional[str] = None,
        rating: Optional[str] = None,
        limit: Optional[int] = None,
        page: int = 1,
        append: bool = False
    ) -> dict[str, Any]:
        """Fresh fetch (or explicit append) of the recommendation list"""
        try:
            criteria = FilterCriteria(
                ticker=ticker,
                rating=rating,
                page_size=limit if limit is not None else self.store.page_size
            )
            before = len(self.store.recommendations)
            await self.store.fetch_list(criteria, page=page, append=append)

            status = self.store.status(Stream.LIST)
            if status.error:
                return {"success": False, "error": status.error}

            appended = len(self.store.recommendations) - before if append else None
            return self._list_result(appended)

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch recommendations: {str(e)}"
            }

    async def load_more_recommendations(self) -> dict[str, Any]:
        """Append the next page using the active filters"""
        try:
            before = len(self.store.recommendations)
            await self.store.load_more()

            status = self.store.status(Stream.LIST)
            if status.error:
                return {"success": False, "error": status.error}

            return self._list_result(len(self.store.recommendations) - before)

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to load more recommendations: {str(e)}"
            }

    async def get_stock_detail(self, ticker: str) -> dict[str, Any]:
        """Most recent recommendation for a ticker"""
        try:
            await self.store.fetch_detail(ticker)

            status = self.store.status(Stream.DETAIL)
            if status.error or self.store.current_stock is None:
                return {"success": False, "error": status.error or "No stock selected"}

            return {
                "success": True,
                "stock": _rec(self.store.current_stock),
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch stock details: {str(e)}"
            }

    async def get_top_stocks(self, limit: Optional[int] = None) -> dict[str, Any]:
        """Best recommendations according to the service's scoring"""
        try:
            await self.store.fetch_top(limit)

            status = self.store.status(Stream.TOP)
            if status.error:
                return {"success": False, "error": status.error}

            top = self.store.top_stocks
            return {
                "success": True,
                "recommendations": [_rec(r) for r in top],
                "count": len(top),
                "generated_at": self.store.snapshot.top_generated_at,
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch top stocks: {str(e)}"
            }

    async def list_tickers(self) -> dict[str, Any]:
        """All tickers the service has recommendations for"""
        try:
            await self.store.fetch_tickers()

            status = self.store.status(Stream.TICKERS)
            if status.error:
                return {"success": False, "error": status.error}

            return {
                "success": True,
                "tickers": list(self.store.tickers),
                "count": len(self.store.tickers),
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch tickers: {str(e)}"
            }

    async def get_recommendation_history(self, ticker: str) -> dict[str, Any]:
        """Price-target history for a ticker"""
        try:
            await self.store.fetch_history(ticker)

            status = self.store.status(Stream.HISTORY)
            if status.error:
                return {"success": False, "error": status.error}

            return {
                "success": True,
                "ticker": ticker.strip(),
                "history": [asdict(h) for h in self.store.history],
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch recommendation history: {str(e)}"
            }

    async def check_health(self) -> dict[str, Any]:
        """Ping the recommendation service"""
        try:
            body = await self.container.source.health()
            status = body.get("status", "unknown") if isinstance(body, dict) else "unknown"
            return {
                "success": status == "healthy",
                "status": status,
                "version": body.get("version") if isinstance(body, dict) else None,
                "base_url": self.container.source.base_url,
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Health check failed: {str(e)}"
            }
