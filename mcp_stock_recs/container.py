"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from typing import Optional

import httpx

from .adapters import HttpRecommendationSource
from .config import DEFAULT_PAGE_SIZE, DEFAULT_TOP_LIMIT
from .core import RecommendationStore


class Container:
    """Dependency injection container for the application"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        top_limit: int = DEFAULT_TOP_LIMIT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        # Adapters (infrastructure)
        self.source = HttpRecommendationSource(base_url, timeout, transport=transport)

        # Store (use cases + state)
        self.store = RecommendationStore(
            source=self.source,
            page_size=page_size,
            top_limit=top_limit
        )

    async def aclose(self) -> None:
        await self.source.aclose()
