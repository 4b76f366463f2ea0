"""Abstract base classes for entries of a fallback chain."""

from abc import ABC, abstractmethod

from stockdrop.models.quote import FetchOutcome, HistoricalSeries, Quote


class QuoteSource(ABC):
    """One way of obtaining a current Quote for a symbol.

    Implementations never raise for upstream problems: every failure is
    returned as a classified FetchOutcome so the resolver can move on.
    """

    name: str = "source"

    @abstractmethod
    async def fetch(self, symbol: str, timeout: float) -> FetchOutcome[Quote]:
        """Fetch and normalize a quote for ``symbol`` within ``timeout`` seconds."""


class SeriesSource(ABC):
    """One way of obtaining a HistoricalSeries for a symbol."""

    name: str = "source"

    @abstractmethod
    async def fetch(self, symbol: str, timeout: float) -> FetchOutcome[HistoricalSeries]:
        """Fetch and normalize a price series for ``symbol`` within ``timeout`` seconds."""
