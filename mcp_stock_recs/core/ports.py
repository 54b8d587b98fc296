"""
Ports - Interfaces for external dependencies

These define HOW the core talks to the recommendation service,
but NOT the implementation details. Implementations return the
decoded response body as-is; shape checks belong to the core.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class SourceError(Exception):
    """Transport failure, non-success status, or undecodable body"""


class RecommendationSource(ABC):
    """Port for the read-only recommendation service"""

    @abstractmethod
    async def list_recommendations(
        self,
        ticker: Optional[str],
        rating: Optional[str],
        limit: int,
        page: int
    ) -> Any:
        """GET /recommendations - `{data: [...], hasMore: bool}`"""
        pass

    @abstractmethod
    async def latest_for_ticker(self, ticker: str) -> Any:
        """GET /recommendations?ticker=&limit=1 - `{data: [...]}`"""
        pass

    @abstractmethod
    async def best(self, limit: int) -> Any:
        """GET /recommendations/best - `{best_recommendations: [...]}`"""
        pass

    @abstractmethod
    async def tickers(self) -> Any:
        """GET /recommendations/tickers - list of ticker strings"""
        pass

    @abstractmethod
    async def health(self) -> Any:
        """GET /health - `{status: ...}`"""
        pass
