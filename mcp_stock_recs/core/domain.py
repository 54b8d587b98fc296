"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts:
recommendations as received from the service, and the small immutable
state values the store hands out to the presentation layer.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ResponseShapeError(ValueError):
    """Response body does not have the shape an operation expects"""


def _parse_price(value: Any, field_name: str) -> float:
    """Target prices arrive as JSON numbers or numeric strings ("150.00")"""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ResponseShapeError(f"Invalid {field_name}: {value!r}")
    try:
        return float(str(value).replace("$", "").replace(",", ""))
    except ValueError:
        raise ResponseShapeError(f"Invalid {field_name}: {value!r}") from None


@dataclass(frozen=True)
class Recommendation:
    """One analyst rating change for a ticker at a point in time"""
    ticker: str
    company: str = ""
    rating_from: str = ""
    rating_to: str = ""
    target_from: float = 0.0
    target_to: float = 0.0
    brokerage: str = ""
    action: str = ""
    time: str = ""  # ISO-8601, ordering key

    @classmethod
    def from_dict(cls, raw: Any) -> "Recommendation":
        """Build from a decoded JSON record"""
        if not isinstance(raw, dict):
            raise ResponseShapeError(f"Recommendation must be an object, got {type(raw).__name__}")

        ticker = raw.get("ticker")
        if not isinstance(ticker, str) or not ticker:
            raise ResponseShapeError("Recommendation is missing its ticker")

        return cls(
            ticker=ticker,
            company=str(raw.get("company") or ""),
            rating_from=str(raw.get("rating_from") or ""),
            rating_to=str(raw.get("rating_to") or ""),
            target_from=_parse_price(raw.get("target_from"), "target_from"),
            target_to=_parse_price(raw.get("target_to"), "target_to"),
            brokerage=str(raw.get("brokerage") or ""),
            action=str(raw.get("action") or ""),
            time=str(raw.get("time") or ""),
        )

    @property
    def timestamp(self) -> Optional[datetime]:
        """`time` as a datetime, or None if it can't be parsed"""
        if not self.time:
            return None
        try:
            return datetime.fromisoformat(self.time.replace("Z", "+00:00"))
        except ValueError:
            return None


@dataclass(frozen=True)
class HistoryEntry:
    """Price-target history point for a ticker"""
    time: str
    target_from: float
    target_to: float

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> "HistoryEntry":
        return cls(time=rec.time, target_from=rec.target_from, target_to=rec.target_to)


@dataclass(frozen=True)
class RecommendationPage:
    """One page of the list endpoint"""
    data: tuple[Recommendation, ...]
    has_more: bool

    @classmethod
    def from_body(cls, body: Any) -> "RecommendationPage":
        """Parse `{data: [...], hasMore: bool}`; hasMore must be a real boolean"""
        records = parse_records(body)
        has_more = body.get("hasMore")
        if not isinstance(has_more, bool):
            raise ResponseShapeError(f"hasMore must be a boolean, got {has_more!r}")
        return cls(data=records, has_more=has_more)


def parse_records(body: Any, key: str = "data") -> tuple[Recommendation, ...]:
    """Extract and parse the record list stored under `key` in an envelope"""
    if not isinstance(body, dict):
        raise ResponseShapeError(f"Expected a JSON object, got {type(body).__name__}")
    records = body.get(key)
    if not isinstance(records, list):
        raise ResponseShapeError(f"Response has no '{key}' list")
    return tuple(Recommendation.from_dict(r) for r in records)


@dataclass(frozen=True)
class FilterCriteria:
    """Active list filter: exact-match ticker/rating plus page size"""
    ticker: Optional[str] = None
    rating: Optional[str] = None
    page_size: int = 20

    def __post_init__(self):
        # Empty strings mean "no filter"
        if not self.ticker:
            object.__setattr__(self, "ticker", None)
        if not self.rating:
            object.__setattr__(self, "rating", None)
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")


@dataclass(frozen=True)
class PaginationCursor:
    """Page of the last merged response and whether more pages exist"""
    page: int = 1
    has_more: bool = True


class Stream(str, Enum):
    """Independent request streams, each with its own status"""
    LIST = "list"
    DETAIL = "detail"
    TOP = "top"
    TICKERS = "tickers"
    HISTORY = "history"


@dataclass(frozen=True)
class RequestStatus:
    loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of every slot in the store"""
    recommendations: tuple[Recommendation, ...] = ()
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    cursor: PaginationCursor = field(default_factory=PaginationCursor)
    current_stock: Optional[Recommendation] = None
    top_stocks: tuple[Recommendation, ...] = ()
    top_generated_at: Optional[str] = None
    tickers: tuple[str, ...] = ()
    history: tuple[HistoryEntry, ...] = ()
    statuses: dict[Stream, RequestStatus] = field(
        default_factory=lambda: {s: RequestStatus() for s in Stream}
    )

    @property
    def loading(self) -> bool:
        """True while any stream has a request in flight"""
        return any(s.loading for s in self.statuses.values())
