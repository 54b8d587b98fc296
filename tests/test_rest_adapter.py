"""
Tests for HttpRecommendationSource

Uses httpx.MockTransport so no network is touched.
"""
import asyncio

import httpx
import pytest

from mcp_stock_recs.adapters import HttpRecommendationSource
from mcp_stock_recs.core import SourceError


def make_source(handler, base_url="http://api.test/http/v1"):
    return HttpRecommendationSource(base_url, timeout=5, transport=httpx.MockTransport(handler))


def recorder(body, status=200):
    """Handler returning `body` and remembering requests"""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=body)

    return handler, requests


class TestRequests:
    """Test paths and query parameters."""

    def test_list_sends_only_set_filters(self):
        """Test empty ticker/rating are omitted; limit and page always sent."""
        handler, requests = recorder({"data": [], "hasMore": False})
        source = make_source(handler)
        asyncio.run(source.list_recommendations(None, None, 20, 1))

        url = requests[0].url
        assert url.path == "/http/v1/recommendations"
        assert dict(url.params) == {"limit": "20", "page": "1"}

    def test_list_with_filters(self):
        handler, requests = recorder({"data": [], "hasMore": False})
        source = make_source(handler)
        asyncio.run(source.list_recommendations("AAPL", "Buy", 5, 3))
        assert dict(requests[0].url.params) == {"ticker": "AAPL", "rating": "Buy", "limit": "5", "page": "3"}

    def test_list_empty_string_filters_omitted(self):
        handler, requests = recorder({"data": [], "hasMore": False})
        source = make_source(handler)
        asyncio.run(source.list_recommendations("", "", 5, 1))
        assert "ticker" not in requests[0].url.params
        assert "rating" not in requests[0].url.params

    def test_latest_for_ticker(self):
        handler, requests = recorder({"data": []})
        source = make_source(handler)
        asyncio.run(source.latest_for_ticker("TSLA"))
        assert requests[0].url.path == "/http/v1/recommendations"
        assert dict(requests[0].url.params) == {"ticker": "TSLA", "limit": "1"}

    def test_best(self):
        handler, requests = recorder({"best_recommendations": []})
        source = make_source(handler)
        asyncio.run(source.best(10))
        assert requests[0].url.path == "/http/v1/recommendations/best"
        assert dict(requests[0].url.params) == {"limit": "10"}

    def test_tickers(self):
        handler, requests = recorder(["AAPL", "MSFT"])
        source = make_source(handler)
        body = asyncio.run(source.tickers())
        assert body == ["AAPL", "MSFT"]
        assert requests[0].url.path == "/http/v1/recommendations/tickers"

    def test_health(self):
        handler, requests = recorder({"status": "healthy", "version": "1.0.0"})
        source = make_source(handler)
        body = asyncio.run(source.health())
        assert body["status"] == "healthy"
        assert requests[0].url.path == "/http/v1/health"

    def test_trailing_slash_base_url(self):
        handler, requests = recorder(["AAPL"])
        source = make_source(handler, base_url="http://api.test/http/v1/")
        asyncio.run(source.tickers())
        assert source.base_url == "http://api.test/http/v1"
        assert requests[0].url.path == "/http/v1/recommendations/tickers"

    def test_returns_body_unvalidated(self):
        """Test shape checks are left to the core."""
        handler, _ = recorder({"unexpected": True})
        source = make_source(handler)
        assert asyncio.run(source.tickers()) == {"unexpected": True}


class TestErrors:
    """Test transport failures map to SourceError."""

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    def test_non_success_status(self, status):
        handler, _ = recorder({"error": "nope"}, status=status)
        source = make_source(handler)
        with pytest.raises(SourceError, match=str(status)):
            asyncio.run(source.list_recommendations(None, None, 20, 1))

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>not json</html>")

        source = make_source(handler)
        with pytest.raises(SourceError, match="invalid JSON"):
            asyncio.run(source.tickers())

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = make_source(handler)
        with pytest.raises(SourceError) as exc_info:
            asyncio.run(source.best(5))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        source = make_source(handler)
        with pytest.raises(SourceError):
            asyncio.run(source.health())
