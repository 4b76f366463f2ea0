"""FMP endpoint descriptors.

An EndpointSpec only describes *where* to fetch: the path template, the
query parameters and the payload shape the normalizer should expect. The
API key is appended by the client, never stored here.
"""

from dataclasses import dataclass, field
from datetime import date
from urllib.parse import quote as url_quote

from stockdrop.models.quote import SourceKind


@dataclass(frozen=True)
class EndpointSpec:
    name: str
    path: str  # may contain "{symbol}"
    source: SourceKind
    params: dict[str, str] = field(default_factory=dict)  # values may contain "{symbol}"

    def build(self, symbol: str) -> tuple[str, dict[str, str]]:
        """Return (path, query params) with the symbol substituted."""
        path = self.path.replace("{symbol}", url_quote(symbol, safe=","))
        params = {k: v.replace("{symbol}", symbol) for k, v in self.params.items()}
        return path, params


QUOTE = EndpointSpec("quote", "/quote/{symbol}", SourceKind.QUOTE)

HISTORICAL_LIGHT = EndpointSpec(
    "historical-light",
    "/historical-price-eod/light",
    SourceKind.HISTORICAL_LIGHT,
    {"symbol": "{symbol}"},
)


def _date_params(start: date | None, end: date | None) -> dict[str, str]:
    params = {}
    if start:
        params["from"] = start.isoformat()
    if end:
        params["to"] = end.isoformat()
    return params


def historical_full(start: date | None = None, end: date | None = None) -> EndpointSpec:
    """Daily OHLC history, optionally limited to [start, end]."""
    return EndpointSpec(
        "historical-full",
        "/historical-price-full/{symbol}",
        SourceKind.HISTORICAL_FULL,
        _date_params(start, end),
    )


def historical_light(start: date | None = None, end: date | None = None) -> EndpointSpec:
    """Lightweight {date, price} history, optionally limited to [start, end]."""
    return EndpointSpec(
        HISTORICAL_LIGHT.name,
        HISTORICAL_LIGHT.path,
        SourceKind.HISTORICAL_LIGHT,
        {**HISTORICAL_LIGHT.params, **_date_params(start, end)},
    )


def screener(**filters: object) -> EndpointSpec:
    """Stock screener with FMP filter names (sector, limit, marketCapMoreThan, ...).

    ``None`` filters are dropped. The screener ignores the symbol argument.
    """
    params = {k: str(v) for k, v in filters.items() if v is not None}
    return EndpointSpec("screener", "/stock-screener", SourceKind.SCREENER, params)


def search(query: str, limit: int = 10) -> EndpointSpec:
    """Symbol/company-name search. The query travels as a param, not as the symbol."""
    return EndpointSpec("search", "/search", SourceKind.SEARCH, {"query": query, "limit": str(limit)})


def intraday_chart(interval: str = "5min") -> EndpointSpec:
    """Intraday OHLCV bars at ``interval`` (1min, 5min, 15min, ...)."""
    return EndpointSpec(f"chart-{interval}", f"/historical-chart/{interval}/{{symbol}}", SourceKind.INTRADAY)


def stock_news(limit: int = 2) -> EndpointSpec:
    return EndpointSpec("stock-news", "/stock_news", SourceKind.NEWS, {"tickers": "{symbol}", "limit": str(limit)})
