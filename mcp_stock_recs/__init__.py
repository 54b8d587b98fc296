"""
stock-recs MCP - analyst stock recommendations over MCP

Client-side store over a read-only recommendation API, exposed as
MCP tools and a CLI.
"""
__version__ = "0.1.0"
