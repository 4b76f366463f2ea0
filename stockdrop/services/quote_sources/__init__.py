from stockdrop.services.quote_sources.base import QuoteSource, SeriesSource
from stockdrop.services.quote_sources.http import HttpQuoteSource, HttpSeriesSource
from stockdrop.services.quote_sources.placeholder import PlaceholderQuoteSource, demo_quote

__all__ = [
    "QuoteSource",
    "SeriesSource",
    "HttpQuoteSource",
    "HttpSeriesSource",
    "PlaceholderQuoteSource",
    "demo_quote",
]
