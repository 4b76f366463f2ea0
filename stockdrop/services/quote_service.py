"""Quote business logic: fallback chains, batch quotes, screener ranking, search and details.

Routers and the widget service call into QuoteService; it owns no state
beyond the configured client, so concurrent requests never interfere.
Public methods return plain values and raise QuoteFetchError on failure.
"""

import asyncio
import logging
from datetime import date, timedelta

from stockdrop.config import Settings
from stockdrop.constants import COMMODITY_SYMBOLS, PERIOD_DAYS
from stockdrop.models.market import SearchResult, StockDetails
from stockdrop.models.quote import ErrorKind, FetchOutcome, HistoricalSeries, NormalizationError, Quote, QuoteFetchError
from stockdrop.services.fmp import (
    QUOTE,
    QuoteClient,
    historical_full,
    historical_light,
    intraday_chart,
    normalize_quote_rows,
    parse_intraday_chart,
    parse_news,
    parse_screener_symbols,
    parse_search_results,
    screener,
    stock_news,
)
from stockdrop.services.fmp import search as search_endpoint
from stockdrop.services.quote_sources import (
    HttpQuoteSource,
    HttpSeriesSource,
    PlaceholderQuoteSource,
    demo_quote,
)
from stockdrop.services.ranking import Direction, rank_by_change, select_extreme
from stockdrop.services.resolver import ChainEntry, resolve, resolve_series

logger = logging.getLogger(__name__)

# Demo data shown by the gold/silver widgets when every live source fails.
# Oil has no demo entry: its widget shows the error instead.
DEMO_QUOTES: dict[str, Quote] = {
    "GCUSD": demo_quote("GCUSD", 2025.50, 1.2, 24.30),
    "SIUSD": demo_quote("SIUSD", 24.75, -0.8, -0.20),
}

# Minimum liquidity for screener candidates.
_SCREENER_MIN_MARKET_CAP = 500_000_000
_SCREENER_MIN_VOLUME = 500_000


def parse_symbols(symbols: str) -> list[str]:
    """Split a comma-separated symbol string, uppercased and de-duplicated."""
    return list(dict.fromkeys(s.strip().upper() for s in symbols.split(",") if s.strip()))


class QuoteService:
    def __init__(self, client: QuoteClient, settings: Settings):
        self._client = client
        self._settings = settings

    # ── chains ───────────────────────────────────────────────────────

    def quote_chain(self, placeholder: Quote | None = None) -> list[ChainEntry]:
        """Quote endpoint first, light history second, optional demo quote last."""
        chain = [
            ChainEntry(HttpQuoteSource(self._client, QUOTE), self._settings.quote_timeout),
            ChainEntry(HttpQuoteSource(self._client, historical_light()), self._settings.historical_timeout),
        ]
        if placeholder is not None:
            chain.append(ChainEntry(PlaceholderQuoteSource(placeholder), self._settings.quote_timeout))
        return chain

    def series_chain(self, start: date, end: date) -> list[ChainEntry]:
        """Full OHLC history first, light history second."""
        return [
            ChainEntry(HttpSeriesSource(self._client, historical_full(start, end)), self._settings.historical_timeout),
            ChainEntry(HttpSeriesSource(self._client, historical_light(start, end)), self._settings.historical_timeout),
        ]

    # ── single symbol ────────────────────────────────────────────────

    async def get_quote(self, symbol: str) -> Quote:
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValueError("symbol must be a non-empty string")
        outcome = await resolve(symbol, self.quote_chain())
        return outcome.unwrap()

    async def get_commodity(self, kind: str) -> Quote:
        symbol = COMMODITY_SYMBOLS.get(kind)
        if symbol is None:
            raise ValueError(f"Unknown commodity: {kind!r}. Available: {list(COMMODITY_SYMBOLS)}")
        outcome = await resolve(symbol, self.quote_chain(DEMO_QUOTES.get(symbol)))
        return outcome.unwrap()

    async def get_history(self, symbol: str, period: str = "3mo") -> HistoricalSeries:
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValueError("symbol must be a non-empty string")
        end = date.today()
        start = end - timedelta(days=PERIOD_DAYS.get(period, 90))
        outcome = await resolve_series(symbol, self.series_chain(start, end))
        return outcome.unwrap()

    # ── batches ──────────────────────────────────────────────────────

    async def _fetch_batch(self, batch: list[str], sem: asyncio.Semaphore) -> FetchOutcome[list[Quote]]:
        async with sem:
            outcome = await self._client.fetch(QUOTE, ",".join(batch), self._settings.quote_timeout)
        if not outcome.ok:
            return outcome
        try:
            return FetchOutcome.success(normalize_quote_rows(outcome.value))
        except NormalizationError as exc:
            logger.warning("Batch quote for %s unusable: %s", ",".join(batch), exc)
            return FetchOutcome.failure(ErrorKind.PARSE_ERROR, str(exc))

    async def get_quotes(self, symbols: list[str]) -> list[Quote]:
        """Fetch quotes for many symbols in comma-joined batches.

        Batches run concurrently (bounded by ``quote_batch_concurrency``).
        Failed batches are logged and skipped; if *every* batch fails, the
        last failure is raised. Results follow the order of ``symbols``.
        """
        symbols = list(dict.fromkeys(s.upper() for s in symbols if s))
        if not symbols:
            return []

        size = max(1, self._settings.quote_batch_size)
        batches = [symbols[i:i + size] for i in range(0, len(symbols), size)]
        sem = asyncio.Semaphore(max(1, self._settings.quote_batch_concurrency))
        outcomes = await asyncio.gather(*(self._fetch_batch(b, sem) for b in batches))

        failures = [o for o in outcomes if not o.ok]
        if len(failures) == len(outcomes):
            raise QuoteFetchError(failures[-1].error, failures[-1].detail)
        if failures:
            logger.warning("%d/%d quote batches failed", len(failures), len(outcomes))

        by_symbol: dict[str, Quote] = {}
        for outcome in outcomes:
            if outcome.ok:
                for q in outcome.value:
                    by_symbol.setdefault(q.symbol, q)
        return [by_symbol[s] for s in symbols if s in by_symbol]

    async def screen_symbols(self, sector: str | None = None, limit: int | None = None) -> list[str]:
        endpoint = screener(
            sector=sector,
            marketCapMoreThan=_SCREENER_MIN_MARKET_CAP,
            volumeMoreThan=_SCREENER_MIN_VOLUME,
            limit=limit or self._settings.screener_limit,
        )
        outcome = await self._client.fetch(endpoint, "", self._settings.screener_timeout)
        try:
            return parse_screener_symbols(outcome.unwrap())
        except NormalizationError as exc:
            raise QuoteFetchError(ErrorKind.PARSE_ERROR, str(exc)) from exc

    async def _screened_quotes(
        self, sector: str | None, limit: int | None, max_quoted: int | None = None,
    ) -> list[Quote]:
        symbols = await self.screen_symbols(sector=sector, limit=limit)
        if not symbols:
            logger.info("Screener returned no symbols (sector=%s)", sector)
            return []
        if max_quoted is not None:
            symbols = symbols[:max_quoted]
        return await self.get_quotes(symbols)

    async def get_top_mover(
        self, direction: Direction, sector: str | None = None, limit: int | None = None,
    ) -> Quote | None:
        """Return the steepest mover of a screener batch, or None when it is empty."""
        quotes = await self._screened_quotes(sector, limit)
        return select_extreme(quotes, direction)

    async def get_losers(
        self, threshold: float = -5.0, count: int = 10, sector: str | None = None,
    ) -> list[Quote]:
        """Return the worst screener performers strictly below ``threshold`` percent.

        Only the first ``losers_candidate_limit`` screener symbols are quoted.
        """
        quotes = await self._screened_quotes(sector, None, self._settings.losers_candidate_limit)
        return rank_by_change(quotes, Direction.MAX_DECLINE, limit=count, threshold=threshold)

    # ── search & details ─────────────────────────────────────────────

    async def search(self, query: str) -> list[SearchResult]:
        """Search symbols and company names. A blank query returns [] without a request."""
        query = query.strip()
        if not query:
            return []
        endpoint = search_endpoint(query, self._settings.search_limit)
        outcome = await self._client.fetch(endpoint, "", self._settings.quote_timeout)
        try:
            return parse_search_results(outcome.unwrap())
        except NormalizationError as exc:
            raise QuoteFetchError(ErrorKind.PARSE_ERROR, str(exc)) from exc

    async def _fetch_optional(self, endpoint, parser, symbol: str, timeout: float) -> list:
        """Fetch a detail-page extra; any failure is logged and yields []."""
        outcome = await self._client.fetch(endpoint, symbol, timeout)
        if not outcome.ok:
            logger.warning("%s: %s unavailable (%s: %s)", symbol, endpoint.name, outcome.error.value, outcome.detail)
            return []
        try:
            return parser(outcome.value)
        except NormalizationError as exc:
            logger.warning("%s: %s unusable: %s", symbol, endpoint.name, exc)
            return []

    async def get_details(self, symbol: str) -> StockDetails:
        """Quote, recent 5-minute chart and latest news for one symbol, fetched concurrently.

        Raises LookupError when no source knows the symbol. Chart and news are
        best effort and come back empty when their endpoints fail.
        """
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValueError("symbol must be a non-empty string")

        points = self._settings.details_chart_points
        quote_outcome, chart, news = await asyncio.gather(
            resolve(symbol, self.quote_chain()),
            self._fetch_optional(
                intraday_chart("5min"),
                lambda payload: parse_intraday_chart(payload, limit=points),
                symbol,
                self._settings.historical_timeout,
            ),
            self._fetch_optional(
                stock_news(self._settings.details_news_limit), parse_news, symbol, self._settings.quote_timeout,
            ),
        )
        if quote_outcome.error is ErrorKind.PARSE_ERROR:
            raise LookupError(f"No quote data for {symbol}")
        return StockDetails(
            quote=quote_outcome.unwrap(),
            chart=tuple(chart),
            news=tuple(news[: self._settings.details_news_limit]),
        )

    # ── health ───────────────────────────────────────────────────────

    async def check_upstream(self) -> ErrorKind | None:
        """Probe the quote endpoint. Returns None when healthy, else the error kind."""
        outcome = await self._client.fetch(QUOTE, "AAPL", self._settings.quote_timeout)
        return outcome.error
