"""Fallback resolution across an ordered chain of sources.

The chain is tried strictly in the order given: the first success wins and
later entries are never called. When every entry fails, the *last* failure
is returned, since later entries are the cheaper, more available paths.
Intermediate failures are only visible in the logs.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from stockdrop.models.quote import FetchOutcome, HistoricalSeries, Quote
from stockdrop.services.quote_sources import QuoteSource, SeriesSource

logger = logging.getLogger(__name__)

_S = TypeVar("_S", QuoteSource, SeriesSource)


@dataclass(frozen=True)
class ChainEntry(Generic[_S]):
    source: _S
    timeout: float


async def _run_chain(symbol: str, chain: Sequence[ChainEntry]) -> FetchOutcome:
    if not chain:
        raise ValueError("fallback chain must contain at least one entry")

    last: FetchOutcome | None = None
    for position, entry in enumerate(chain, start=1):
        outcome = await entry.source.fetch(symbol, entry.timeout)
        if outcome.ok:
            if position > 1:
                logger.info(
                    "Resolved %s via %s (entry %d/%d)",
                    symbol, entry.source.name, position, len(chain),
                )
            return outcome
        logger.warning(
            "%s: %s failed with %s (%s), entry %d/%d",
            symbol, entry.source.name, outcome.error.value, outcome.detail, position, len(chain),
        )
        last = outcome

    return last


async def resolve(symbol: str, chain: Sequence[ChainEntry[QuoteSource]]) -> FetchOutcome[Quote]:
    """Resolve a current quote for ``symbol`` through ``chain``."""
    return await _run_chain(symbol, chain)


async def resolve_series(
    symbol: str, chain: Sequence[ChainEntry[SeriesSource]],
) -> FetchOutcome[HistoricalSeries]:
    """Resolve a price series for ``symbol`` through ``chain``."""
    return await _run_chain(symbol, chain)
