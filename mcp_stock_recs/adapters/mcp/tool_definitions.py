"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by the HTTP/SSE server and the CLI's list-tools command.
"""

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "fetch_recommendations": {
        "name": "fetch_recommendations",
        "description": """List analyst recommendations, filtered and paginated. Resets to page 1.

fetch_recommendations(ticker="AAPL", limit=10) → {recommendations: [...], page: 1, has_more: true}
Then: load_more_recommendations() for the next page with the same filters.
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "ticker": {
                    "type": "string",
                    "description": "Exact ticker filter (e.g. AAPL). Omit for all tickers."
                },
                "rating": {
                    "type": "string",
                    "description": "Exact new-rating filter (e.g. Buy, Outperform). Omit for all ratings."
                },
                "limit": {
                    "type": "integer",
                    "description": "Page size",
                    "default": 20
                }
            },
            "required": []
        }
    },
    "load_more_recommendations": {
        "name": "load_more_recommendations",
        "description": """Append the next page of recommendations using the filters of the last fetch_recommendations call.

No-op once has_more is false.
""",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": []
        }
    },
    "get_stock_detail": {
        "name": "get_stock_detail",
        "description": """Most recent recommendation for one ticker.

get_stock_detail("AAPL") → {stock: {ticker, company, rating_from, rating_to, target_from, target_to, ...}}
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "ticker": {
                    "type": "string",
                    "description": "Stock ticker (e.g. AAPL, TSLA)"
                }
            },
            "required": ["ticker"]
        }
    },
    "get_top_stocks": {
        "name": "get_top_stocks",
        "description": """Best-scored recommendations across all tickers.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "description": "Number of recommendations to return",
                    "default": 20
                }
            },
            "required": []
        }
    },
    "list_tickers": {
        "name": "list_tickers",
        "description": """All tickers that have at least one recommendation.""",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": []
        }
    },
    "get_recommendation_history": {
        "name": "get_recommendation_history",
        "description": """Price-target history (time, target_from, target_to) for a ticker.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "ticker": {
                    "type": "string",
                    "description": "Stock ticker (e.g. AAPL, TSLA)"
                }
            },
            "required": ["ticker"]
        }
    },
    "check_health": {
        "name": "check_health",
        "description": """Check that the recommendation service is reachable and healthy.""",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": []
        }
    },
}
