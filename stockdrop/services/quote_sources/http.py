"""Chain entries backed by an FMP endpoint: client fetch, then normalizer."""

import logging

from stockdrop.models.quote import ErrorKind, FetchOutcome, HistoricalSeries, NormalizationError, Quote
from stockdrop.services.fmp import EndpointSpec, QuoteClient, normalize, normalize_series
from stockdrop.services.quote_sources.base import QuoteSource, SeriesSource

logger = logging.getLogger(__name__)


class HttpQuoteSource(QuoteSource):
    def __init__(self, client: QuoteClient, endpoint: EndpointSpec):
        self._client = client
        self._endpoint = endpoint
        self.name = endpoint.name

    async def fetch(self, symbol: str, timeout: float) -> FetchOutcome[Quote]:
        outcome = await self._client.fetch(self._endpoint, symbol, timeout)
        if not outcome.ok:
            return outcome
        try:
            return FetchOutcome.success(normalize(outcome.value, self._endpoint.source, symbol))
        except NormalizationError as exc:
            logger.warning("Could not normalize %s payload for %s: %s", self.name, symbol, exc)
            return FetchOutcome.failure(ErrorKind.PARSE_ERROR, str(exc))


class HttpSeriesSource(SeriesSource):
    def __init__(self, client: QuoteClient, endpoint: EndpointSpec):
        self._client = client
        self._endpoint = endpoint
        self.name = endpoint.name

    async def fetch(self, symbol: str, timeout: float) -> FetchOutcome[HistoricalSeries]:
        outcome = await self._client.fetch(self._endpoint, symbol, timeout)
        if not outcome.ok:
            return outcome
        try:
            return FetchOutcome.success(normalize_series(outcome.value, self._endpoint.source, symbol))
        except NormalizationError as exc:
            logger.warning("Could not normalize %s series for %s: %s", self.name, symbol, exc)
            return FetchOutcome.failure(ErrorKind.PARSE_ERROR, str(exc))
