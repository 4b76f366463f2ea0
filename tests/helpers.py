"""Shared test helpers: FMP payload builders and a fake FMP transport."""

from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

import httpx

from stockdrop.models.quote import Quote, SourceKind
from stockdrop.services.fmp import QuoteClient

TEST_API_KEY = "test-key-123"


def make_quote(symbol: str, change_percent: float, price: float = 100.0, source=SourceKind.QUOTE) -> Quote:
    """Build a valid Quote whose change agrees in sign with ``change_percent``."""
    return Quote(
        symbol=symbol,
        price=price,
        change=price * change_percent / 100,
        change_percent=change_percent,
        as_of=datetime(2025, 1, 15, 21, 0, tzinfo=timezone.utc),
        source=source,
    )


def quote_row(symbol: str, price: float = 185.5, change: float = 1.5, pct: float = 0.82, **extra) -> dict:
    """One row of an FMP /quote payload."""
    return {
        "symbol": symbol,
        "name": f"{symbol} Inc.",
        "price": price,
        "change": change,
        "changesPercentage": pct,
        "timestamp": 1736974800,
        **extra,
    }


def light_rows(symbol: str, prices: list[float], end: date = date(2025, 1, 15)) -> list[dict]:
    """FMP light history, newest first; ``prices`` are given oldest first."""
    n = len(prices)
    rows = [
        {"symbol": symbol, "date": (end - timedelta(days=n - 1 - i)).isoformat(), "price": p, "volume": 1_000_000}
        for i, p in enumerate(prices)
    ]
    return list(reversed(rows))


def full_payload(symbol: str, closes: list[float], end: date = date(2025, 1, 15)) -> dict:
    """FMP full history object, newest first; ``closes`` are given oldest first."""
    n = len(closes)
    rows = [
        {
            "date": (end - timedelta(days=n - 1 - i)).isoformat(),
            "open": c - 0.5, "high": c + 1.0, "low": c - 1.0, "close": c,
            "volume": 1_000_000 + i,
        }
        for i, c in enumerate(closes)
    ]
    return {"symbol": symbol, "historical": list(reversed(rows))}


Handler = Callable[[httpx.Request], httpx.Response]


class FakeFmp:
    """Serves canned FMP responses keyed by path (without the /api/v3 prefix).

    Unknown paths answer 404. Every request is recorded.
    """

    def __init__(self):
        self.routes: dict[str, Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, json=None, status: int = 200, text: str | None = None):
        if text is not None:
            self.routes[path] = lambda request: httpx.Response(status, text=text)
        else:
            self.routes[path] = lambda request: httpx.Response(status, json=json)

    def add_handler(self, path: str, handler: Handler):
        self.routes[path] = handler

    def fail(self, path: str, exc_type: type[httpx.RequestError] = httpx.ConnectError):
        def handler(request):
            raise exc_type("simulated failure", request=request)
        self.routes[path] = handler

    @property
    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/api/v3") for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v3")
        handler = self.routes.get(path)
        if handler is None:
            return httpx.Response(404, json={"Error Message": "Not found"})
        return handler(request)

    def client(self, api_key: str = TEST_API_KEY) -> QuoteClient:
        return QuoteClient(api_key, transport=httpx.MockTransport(self))


def intraday_rows(closes: list[float], end: datetime = datetime(2025, 1, 15, 16, 0)) -> list[dict]:
    """FMP 5-minute chart bars, newest first; ``closes`` are given oldest first."""
    n = len(closes)
    rows = [
        {
            "date": (end - timedelta(minutes=5 * (n - 1 - i))).strftime("%Y-%m-%d %H:%M:%S"),
            "open": c, "high": c + 0.2, "low": c - 0.2, "close": c, "volume": 10_000,
        }
        for i, c in enumerate(closes)
    ]
    return list(reversed(rows))


def news_row(symbol: str, title: str, **extra) -> dict:
    """One row of an FMP /stock_news payload."""
    return {
        "symbol": symbol,
        "publishedDate": "2025-01-15 14:30:00",
        "title": title,
        "url": f"https://news.example.com/{symbol.lower()}/{len(title)}",
        "site": "Example News",
        "text": f"{title}.",
        "image": None,
        **extra,
    }
