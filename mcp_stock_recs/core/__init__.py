"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- ports.py: Port interface for the recommendation service
- pagination.py: Pure criteria/page and list-merge transitions
- store.py: The state/orchestration store (use cases)
"""
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
)
from .ports import RecommendationSource, SourceError
from .pagination import begin_fetch, merge_page
from .store import RecommendationStore

__all__ = [
    # Domain models
    "FilterCriteria",
    "HistoryEntry",
    "PaginationCursor",
    "Recommendation",
    "RecommendationPage",
    "RequestStatus",
    "ResponseShapeError",
    "StoreSnapshot",
    "Stream",
    # Ports
    "RecommendationSource",
    "SourceError",
    # Transitions
    "begin_fetch",
    "merge_page",
    # Store
    "RecommendationStore",
]
