"""Demo-data chain entry: always succeeds with a fixed quote."""

from dataclasses import replace
from datetime import datetime, timezone

from stockdrop.models.quote import FetchOutcome, Quote, SourceKind
from stockdrop.services.quote_sources.base import QuoteSource


def demo_quote(symbol: str, price: float, change_percent: float, change: float | None = None) -> Quote:
    """Build a placeholder quote; ``change`` defaults to the value implied by the percent."""
    if change is None:
        change = price - price / (1 + change_percent / 100)
    return Quote(
        symbol=symbol,
        price=price,
        change=change,
        change_percent=change_percent,
        as_of=datetime.now(timezone.utc),
        source=SourceKind.PLACEHOLDER,
    )


class PlaceholderQuoteSource(QuoteSource):
    name = "placeholder"

    def __init__(self, quote: Quote):
        self._quote = quote

    async def fetch(self, symbol: str, timeout: float) -> FetchOutcome[Quote]:
        return FetchOutcome.success(replace(self._quote, as_of=datetime.now(timezone.utc)))
