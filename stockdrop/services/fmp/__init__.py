"""Financial Modeling Prep data access.

This package splits FMP access into focused modules:
- endpoints: EndpointSpec and the endpoint variants (quote, light/full history,
  screener, search, intraday chart, news)
- client: QuoteClient, one timeout-bounded GET with classified failures
- normalize: payload shape -> Quote / HistoricalSeries mapping

Public names are re-exported here so consumers can use:
    from stockdrop.services.fmp import <name>
"""

from stockdrop.services.fmp.client import DEFAULT_BASE_URL, QuoteClient, classify_status
from stockdrop.services.fmp.endpoints import (
    HISTORICAL_LIGHT,
    QUOTE,
    EndpointSpec,
    historical_full,
    historical_light,
    intraday_chart,
    screener,
    search,
    stock_news,
)
from stockdrop.services.fmp.normalize import (
    normalize,
    normalize_quote_rows,
    normalize_series,
    parse_intraday_chart,
    parse_news,
    parse_screener_symbols,
    parse_search_results,
    quote_from_series,
)

__all__ = [
    # client
    "DEFAULT_BASE_URL",
    "QuoteClient",
    "classify_status",
    # endpoints
    "EndpointSpec",
    "QUOTE",
    "HISTORICAL_LIGHT",
    "historical_full",
    "historical_light",
    "intraday_chart",
    "screener",
    "search",
    "stock_news",
    # normalize
    "normalize",
    "normalize_series",
    "normalize_quote_rows",
    "parse_intraday_chart",
    "parse_news",
    "parse_screener_symbols",
    "parse_search_results",
    "quote_from_series",
]
