#!/usr/bin/env python3
"""
MCP HTTP/SSE Server - Hexagonal Architecture

HTTP/SSE server using dependency injection and the shared MCP handlers.

Run with: uvicorn mcp_stock_recs.server_http:app --host 127.0.0.1 --port 5002

Configuration:
- PORT: Server port (default: 5002)
- STOCK_API_BASE_URL: Recommendation API base URL (default: http://localhost:8080/http/v1)
- STOCK_API_TIMEOUT: Request timeout in seconds (default: 10)
- STOCK_PAGE_SIZE: Default list page size (default: 20)
"""

import json
import logging
import signal
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
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

# Configure logging with millisecond precision
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(message)s",
    datefmt="%Y/%m/%d %H:%M:%S"
)


class MillisecondFormatter(logging.Formatter):
    """Custom formatter with milliseconds as :XXXX format"""
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Override formatTime to include milliseconds with : separator"""
        ct = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            s = ct.strftime("%Y/%m/%d %H:%M:%S")
            ms = int((record.created % 1) * 10000)
            return f"{s}:{ms:04d}"
        return super().formatTime(record, datefmt)


# Apply custom formatter to root logger
for handler in logging.root.handlers:
    handler.setFormatter(MillisecondFormatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S"
    ))

logger = logging.getLogger(__name__)


# Initialize dependency injection container
container = Container(
    base_url=get_api_base_url(),
    timeout=get_timeout(),
    page_size=get_page_size()
)

# Initialize MCP handlers
handlers = MCPHandlers(container)

# MCP Server instance
mcp_server = Server("stock-recs-mcp")

# SSE transport for multi-client support
sse_transport = SseServerTransport("/messages")

FORMATTERS = {
    "fetch_recommendations": format_recommendations,
    "load_more_recommendations": format_recommendations,
    "get_stock_detail": format_stock_detail,
    "get_top_stocks": format_top_stocks,
    "list_tickers": format_tickers,
    "get_recommendation_history": format_history,
    "check_health": format_health,
}


@mcp_server.list_tools()  # type: ignore[misc,no-untyped-call]
async def list_tools() -> list[Tool]:
    """List available MCP tools"""
    return [Tool(**schema) for schema in TOOL_SCHEMAS.values()]


@mcp_server.call_tool()  # type: ignore[misc,no-untyped-call]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls"""
    logger.info(f"call_tool: {name} args={arguments}")

    try:
        result = await dispatch_tool(name, arguments)
    except Exception as e:
        logger.error(f"call_tool: {name} FAILED: {e}")
        raise

    formatter = FORMATTERS.get(name)
    if formatter:
        formatted_text = formatter(result)
    else:
        formatted_text = json.dumps(result, indent=2)

    logger.info(f"call_tool: {name} returning {len(formatted_text)} chars")
    return [TextContent(type="text", text=formatted_text)]


async def dispatch_tool(name: str, arguments: dict[str, Any]) -> Any:
    """Dispatch tool call to appropriate handler"""
    if name == "fetch_recommendations":
        return await handlers.fetch_recommendations(
            ticker=arguments.get("ticker"),
            rating=arguments.get("rating"),
            limit=arguments.get("limit")
        )

    elif name == "load_more_recommendations":
        return await handlers.load_more_recommendations()

    elif name == "get_stock_detail":
        return await handlers.get_stock_detail(ticker=arguments["ticker"])

    elif name == "get_top_stocks":
        return await handlers.get_top_stocks(limit=arguments.get("limit"))

    elif name == "list_tickers":
        return await handlers.list_tickers()

    elif name == "get_recommendation_history":
        return await handlers.get_recommendation_history(ticker=arguments["ticker"])

    elif name == "check_health":
        return await handlers.check_health()

    else:
        raise ValueError(f"Unknown tool: {name}")


# HTTP routes
async def handle_ping(request: Request) -> Response:
    """Health check endpoint"""
    return JSONResponse({"status": "ok"})


async def handle_sse(request: Request) -> Response:
    """SSE endpoint for MCP communication"""
    client_addr = request.client.host if request.client else "unknown"
    logger.info(f"SSE connect from {client_addr}")
    async with sse_transport.connect_sse(
        request.scope, request.receive, request._send
    ) as streams:
        logger.info(f"SSE session started for {client_addr}")
        await mcp_server.run(
            streams[0], streams[1], mcp_server.create_initialization_options()
        )
        logger.info(f"SSE disconnect from {client_addr}")
    return Response()


routes = [
    Route("/ping", handle_ping),
    Route("/sse", handle_sse),
    Mount("/messages", app=sse_transport.handle_post_message),
]


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    """Close the HTTP client on shutdown"""
    yield
    await container.aclose()


app = Starlette(routes=routes, lifespan=lifespan)


# Graceful shutdown on SIGTERM
def handle_sigterm(signum, frame):
    logger.info("Received SIGTERM, shutting down gracefully...")
    sys.exit(0)


signal.signal(signal.SIGTERM, handle_sigterm)


if __name__ == "__main__":
    import uvicorn
    port = get_port()
    logger.info(f"Starting MCP HTTP server on port {port}")
    uvicorn.run(app, host=get_host(), port=port)
