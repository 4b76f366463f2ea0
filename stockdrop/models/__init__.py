from stockdrop.models.quote import (  # noqa: F401
    ErrorKind,
    FetchOutcome,
    HistoricalPoint,
    HistoricalSeries,
    NormalizationError,
    Quote,
    QuoteFetchError,
    SourceKind,
)
from stockdrop.models.market import IntradayBar, NewsItem, SearchResult, StockDetails  # noqa: F401
