#!/usr/bin/env python3
"""
CLI for stock-recs MCP - test tools without MCP restart

Usage:
  ./cli list-tools                          # Show MCP tool definitions
  ./cli list                                # First page of all recommendations
  ./cli list --ticker AAPL --limit 5        # Filter by ticker
  ./cli list --rating Buy --pages 3         # Fetch page 1, then load 2 more pages
  ./cli detail AAPL                         # Most recent recommendation for AAPL
  ./cli top --limit 10                      # Best recommendations
  ./cli tickers                             # Known tickers
  ./cli history AAPL                        # Price-target history
  ./cli health                              # Ping the recommendation API

Fast iteration: Uses the store directly (no MCP layer).
Base URL comes from --base-url, then $STOCK_API_BASE_URL.
"""

import argparse
import asyncio
import json
import logging
import sys
import traceback

from .container import Container
from .config import get_api_base_url, get_page_size, get_timeout
from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .formatters import (
    format_health,
    format_history,
    format_recommendations,
    format_stock_detail,
    format_tickers,
    format_top_stocks,
)


def make_container(base_url: str) -> Container:
    return Container(
        base_url=base_url,
        timeout=get_timeout(),
        page_size=get_page_size()
    )


async def list_tools_command() -> int:
    """Show MCP tool definitions"""
    print("=" * 80)
    print("MCP TOOL DEFINITIONS")
    print("=" * 80)
    print()

    for tool_schema in TOOL_SCHEMAS.values():
        print(f"Tool: {tool_schema['name']}")
        print()
        print("Description:")
        print(tool_schema['description'])
        print()
        print("Input Schema:")
        print(json.dumps(tool_schema['inputSchema'], indent=2))
        print()
        print("-" * 80)
        print()

    return 0


async def list_command(
    ticker: str | None,
    rating: str | None,
    limit: int | None,
    pages: int,
    base_url: str,
) -> int:
    """List recommendations, optionally loading extra pages"""
    container = make_container(base_url)
    try:
        handlers = MCPHandlers(container)

        result = await handlers.fetch_recommendations(ticker=ticker, rating=rating, limit=limit)
        for _ in range(pages - 1):
            if not result["success"] or not result["has_more"]:
                break
            result = await handlers.load_more_recommendations()

        print(format_recommendations(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


async def detail_command(ticker: str, base_url: str) -> int:
    """Show most recent recommendation for a ticker"""
    container = make_container(base_url)
    try:
        result = await MCPHandlers(container).get_stock_detail(ticker)
        print(format_stock_detail(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


async def top_command(limit: int | None, base_url: str) -> int:
    """Show top recommendations"""
    container = make_container(base_url)
    try:
        result = await MCPHandlers(container).get_top_stocks(limit)
        print(format_top_stocks(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


async def tickers_command(base_url: str) -> int:
    """Show known tickers"""
    container = make_container(base_url)
    try:
        result = await MCPHandlers(container).list_tickers()
        print(format_tickers(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


async def history_command(ticker: str, base_url: str) -> int:
    """Show price-target history for a ticker"""
    container = make_container(base_url)
    try:
        result = await MCPHandlers(container).get_recommendation_history(ticker)
        print(format_history(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


async def health_command(base_url: str) -> int:
    """Ping the recommendation API"""
    container = make_container(base_url)
    try:
        result = await MCPHandlers(container).check_health()
        print(format_health(result))
        return 0 if result["success"] else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        await container.aclose()


def main():
    parser = argparse.ArgumentParser(
        description="stock-recs CLI - Test MCP tools without server restart"
    )
    parser.add_argument(
        "--base-url",
        default=get_api_base_url(),
        help="Recommendation API base URL (default: $STOCK_API_BASE_URL or http://localhost:8080/http/v1)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log store activity to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list-tools command
    subparsers.add_parser("list-tools", help="Show MCP tool definitions")

    # list command
    list_parser = subparsers.add_parser("list", help="List recommendations")
    list_parser.add_argument("--ticker", help="Exact ticker filter (e.g., AAPL)")
    list_parser.add_argument("--rating", help="Exact rating filter (e.g., Buy)")
    list_parser.add_argument("--limit", type=int, help="Page size (default: $STOCK_PAGE_SIZE or 20)")
    list_parser.add_argument("--pages", type=int, default=1, help="Number of pages to load (default: 1)")

    # detail command
    detail_parser = subparsers.add_parser("detail", help="Most recent recommendation for a ticker")
    detail_parser.add_argument("ticker", help="Stock ticker (e.g., AAPL)")

    # top command
    top_parser = subparsers.add_parser("top", help="Top recommendations")
    top_parser.add_argument("--limit", type=int, help="Number of results (default: 20)")

    # tickers command
    subparsers.add_parser("tickers", help="List known tickers")

    # history command
    history_parser = subparsers.add_parser("history", help="Price-target history for a ticker")
    history_parser.add_argument("ticker", help="Stock ticker (e.g., AAPL)")

    # health command
    subparsers.add_parser("health", help="Check the recommendation API")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y/%m/%d %H:%M:%S"
        )

    # Run command
    if args.command == "list-tools":
        return asyncio.run(list_tools_command())
    elif args.command == "list":
        return asyncio.run(list_command(
            ticker=args.ticker,
            rating=args.rating,
            limit=args.limit,
            pages=args.pages,
            base_url=args.base_url
        ))
    elif args.command == "detail":
        return asyncio.run(detail_command(ticker=args.ticker, base_url=args.base_url))
    elif args.command == "top":
        return asyncio.run(top_command(limit=args.limit, base_url=args.base_url))
    elif args.command == "tickers":
        return asyncio.run(tickers_command(base_url=args.base_url))
    elif args.command == "history":
        return asyncio.run(history_command(ticker=args.ticker, base_url=args.base_url))
    elif args.command == "health":
        return asyncio.run(health_command(base_url=args.base_url))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
