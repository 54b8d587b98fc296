"""
HTTP Adapter

Implements RecommendationSource port over the REST API using httpx.
"""
import logging
from typing import Any, Optional

import httpx

from ..core.ports import RecommendationSource, SourceError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/http/v1"
DEFAULT_TIMEOUT = 10.0


class HttpRecommendationSource(RecommendationSource):
    """Recommendation service client using httpx.AsyncClient"""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET `path` and return the decoded JSON body"""
        logger.debug(f"GET {self.base_url}{path} params={params}")
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceError(
                f"GET {path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceError(f"GET {path} failed: {str(e) or type(e).__name__}") from e

        try:
            return response.json()
        except ValueError as e:
            raise SourceError(f"GET {path} returned invalid JSON") from e

    async def list_recommendations(
        self,
        ticker: Optional[str],
        rating: Optional[str],
        limit: int,
        page: int
    ) -> Any:
        # Only send filters that are set
        params: dict[str, Any] = {}
        if ticker:
            params["ticker"] = ticker
        if rating:
            params["rating"] = rating
        params["limit"] = limit
        params["page"] = page
        return await self._get("/recommendations", params)

    async def latest_for_ticker(self, ticker: str) -> Any:
        return await self._get("/recommendations", {"ticker": ticker, "limit": 1})

    async def best(self, limit: int) -> Any:
        return await self._get("/recommendations/best", {"limit": limit})

    async def tickers(self) -> Any:
        return await self._get("/recommendations/tickers")

    async def health(self) -> Any:
        return await self._get("/health")

    async def aclose(self) -> None:
        await self._client.aclose()
