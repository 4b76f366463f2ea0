"""Value objects for the stock detail page and symbol search."""

from dataclasses import dataclass
from datetime import datetime

from stockdrop.models.quote import Quote


@dataclass(frozen=True)
class SearchResult:
    symbol: str
    name: str
    currency: str | None = None
    exchange: str | None = None


@dataclass(frozen=True)
class IntradayBar:
    timestamp: datetime
    close: float
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: int | None = None


@dataclass(frozen=True)
class NewsItem:
    title: str
    url: str
    published_at: datetime | None = None
    site: str | None = None
    summary: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class StockDetails:
    """Quote plus the optional extras; chart and news are empty when unavailable."""

    quote: Quote
    chart: tuple[IntradayBar, ...] = ()
    news: tuple[NewsItem, ...] = ()
