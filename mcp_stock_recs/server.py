"""
stock-recs MCP Server

MCP delivery layer - exposes the recommendation store as MCP tools.
Separation of concerns: this file only handles MCP protocol; the
handlers do the work and the formatters render it.
"""
import argparse
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .adapters.mcp import MCPHandlers
from .config import get_api_base_url, get_host, get_page_size, get_port, get_timeout
from .container import Container
from .formatters import (
    format_health,
    format_history,
    format_recommendations,
    format_stock_detail,
    format_tickers,
    format_top_stocks,
)

# Suppress per-request INFO logs
logging.getLogger("httpx").setLevel(logging.WARNING)

# Initialize MCP server with HTTP config
mcp = FastMCP("stock-recs", host=get_host(), port=get_port())

# Built in main() (or lazily on first tool call) so --base-url can take effect
_handlers: Optional[MCPHandlers] = None


def _get_handlers() -> MCPHandlers:
    global _handlers
    if _handlers is None:
        container = Container(
            base_url=get_api_base_url(),
            timeout=get_timeout(),
            page_size=get_page_size()
        )
        _handlers = MCPHandlers(container)
    return _handlers


@mcp.tool()
async def fetch_recommendations(
    ticker: Optional[str] = None,
    rating: Optional[str] = None,
    limit: Optional[int] = None
) -> str:
    """
    List analyst stock recommendations, newest first. Starts a new listing at page 1.

    Args:
        ticker: Optional exact ticker filter (e.g., "AAPL")
        rating: Optional exact rating filter (e.g., "Buy")
        limit: Page size (default: STOCK_PAGE_SIZE, or 20)

    Returns:
        Table of recommendations with page number and whether more pages exist.

    Example:
        fetch_recommendations(ticker="AAPL", limit=10)
        Then: load_more_recommendations() for page 2 with the same filters
    """
    result = await _get_handlers().fetch_recommendations(ticker=ticker, rating=rating, limit=limit)
    return format_recommendations(result)


@mcp.tool()
async def load_more_recommendations() -> str:
    """
    Append the next page of recommendations using the filters from the last
    fetch_recommendations call. Does nothing once there are no more pages.
    """
    result = await _get_handlers().load_more_recommendations()
    return format_recommendations(result)


@mcp.tool()
async def get_stock_detail(ticker: str) -> str:
    """
    Most recent analyst recommendation for a ticker.

    Args:
        ticker: Stock ticker (e.g., "AAPL", "TSLA")
    """
    result = await _get_handlers().get_stock_detail(ticker)
    return format_stock_detail(result)


@mcp.tool()
async def get_top_stocks(limit: Optional[int] = None) -> str:
    """
    Best-scored recommendations across all tickers.

    Args:
        limit: Number of recommendations to return (default: 20)
    """
    result = await _get_handlers().get_top_stocks(limit)
    return format_top_stocks(result)


@mcp.tool()
async def list_tickers() -> str:
    """All tickers that have at least one recommendation."""
    result = await _get_handlers().list_tickers()
    return format_tickers(result)


@mcp.tool()
async def get_recommendation_history(ticker: str) -> str:
    """
    Price-target history for a ticker.

    Args:
        ticker: Stock ticker (e.g., "AAPL", "TSLA")
    """
    result = await _get_handlers().get_recommendation_history(ticker)
    return format_history(result)


@mcp.tool()
async def check_health() -> str:
    """Check that the recommendation service is reachable and healthy."""
    result = await _get_handlers().check_health()
    return format_health(result)


def main():
    """Main entry point for the MCP server."""
    global _handlers

    parser = argparse.ArgumentParser(
        description="stock-recs: analyst stock recommendations over MCP."
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "streamable-http"],
        help="Transport method (default: stdio)"
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help=f"Recommendation API base URL (default: {get_api_base_url()}, or set STOCK_API_BASE_URL env var)"
    )
    args = parser.parse_args()

    _handlers = MCPHandlers(Container(
        base_url=args.base_url or get_api_base_url(),
        timeout=get_timeout(),
        page_size=get_page_size()
    ))

    # Run the server
    if args.transport == "streamable-http":
        print(f"Starting stock-recs on http://{mcp.settings.host}:{mcp.settings.port}")
        print(f"Recommendation API: {_handlers.container.source.base_url}")
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
