"""
Configuration

Environment lookups with defaults. CLI flags override these.
"""
import os

from .adapters.rest import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

DEFAULT_PAGE_SIZE = 20
DEFAULT_TOP_LIMIT = 20
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5002


def get_api_base_url() -> str:
    """Get recommendation API base URL from env or use fallback"""
    return os.environ.get("STOCK_API_BASE_URL", DEFAULT_BASE_URL)


def get_timeout() -> float:
    """Get HTTP timeout (seconds) from env or use default"""
    value = os.environ.get("STOCK_API_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(value)
    except ValueError:
        msg = f"Invalid STOCK_API_TIMEOUT value: {value}"
        raise ValueError(msg) from None
    if timeout <= 0:
        raise ValueError(f"STOCK_API_TIMEOUT must be positive, got {value}")
    return timeout


def get_page_size() -> int:
    """Get default list page size from env or use default"""
    value = os.environ.get("STOCK_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
    try:
        page_size = int(value)
    except ValueError:
        msg = f"Invalid STOCK_PAGE_SIZE value: {value}"
        raise ValueError(msg) from None
    if page_size < 1:
        raise ValueError(f"STOCK_PAGE_SIZE must be positive, got {value}")
    return page_size


def get_host() -> str:
    """Get server host from environment or use default"""
    return os.environ.get("HOST", DEFAULT_HOST)


def get_port() -> int:
    """Get server port from environment or use default"""
    port_str = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(port_str)
    except ValueError:
        msg = f"Invalid PORT value: {port_str}"
        raise ValueError(msg) from None
