"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- rest.py: httpx-based recommendation service client
"""
from .rest import HttpRecommendationSource

__all__ = [
    "HttpRecommendationSource",
]
