"""Home-screen widget snapshots, refreshed in the background.

Each widget keeps the last successfully fetched quote. A failed refresh
records the error kind and time but never replaces a good snapshot, so a
widget keeps showing stale data instead of going blank.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from stockdrop.config import Settings
from stockdrop.models.quote import ErrorKind, Quote, QuoteFetchError
from stockdrop.services.quote_sources import demo_quote
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.ranking import Direction, select_extreme

logger = logging.getLogger(__name__)

TOP_DECLINE = "top-decline"
COMMODITY_WIDGETS = ("gold", "silver", "oil")
WIDGET_NAMES = (TOP_DECLINE, *COMMODITY_WIDGETS)

# Shown by the top-decline widget when no watched symbol could be fetched.
TOP_DECLINE_DEMO = demo_quote("META", 298.33, -6.1)


@dataclass(frozen=True)
class WidgetSnapshot:
    name: str
    quote: Quote | None = None
    refreshed_at: datetime | None = None
    last_error: ErrorKind | None = None
    last_error_at: datetime | None = None


class WidgetService:
    def __init__(self, quotes: QuoteService, settings: Settings):
        self._quotes = quotes
        self._settings = settings
        self._snapshots: dict[str, WidgetSnapshot] = {name: WidgetSnapshot(name) for name in WIDGET_NAMES}

    def get(self, name: str) -> WidgetSnapshot:
        if name not in self._snapshots:
            raise ValueError(f"Unknown widget: {name!r}. Available: {list(WIDGET_NAMES)}")
        return self._snapshots[name]

    async def _top_decline(self) -> Quote:
        """Steepest decliner among the watched symbols, fetched one by one."""
        quotes = []
        for symbol in self._settings.widget_symbols:
            try:
                quotes.append(await self._quotes.get_quote(symbol))
            except QuoteFetchError as exc:
                logger.warning("Widget quote for %s failed: %s", symbol, exc.kind.value)

        worst = select_extreme(quotes, Direction.MAX_DECLINE)
        if worst is None:
            logger.info("No widget symbols resolved, showing demo decliner")
            return replace(TOP_DECLINE_DEMO, as_of=datetime.now(timezone.utc))
        return worst

    async def refresh(self, name: str) -> WidgetSnapshot:
        """Fetch a fresh quote for one widget and store it if it succeeded."""
        current = self.get(name)
        now = datetime.now(timezone.utc)
        try:
            if name == TOP_DECLINE:
                quote = await self._top_decline()
            else:
                quote = await self._quotes.get_commodity(name)
        except QuoteFetchError as exc:
            logger.warning("Widget %s refresh failed: %s", name, exc)
            snapshot = replace(current, last_error=exc.kind, last_error_at=now)
        else:
            snapshot = replace(current, quote=quote, refreshed_at=now)

        self._snapshots[name] = snapshot
        return snapshot

    async def refresh_all(self) -> dict[str, WidgetSnapshot]:
        """Refresh every widget in turn. Returns the resulting snapshots."""
        failed = 0
        for name in WIDGET_NAMES:
            before = self._snapshots[name]
            after = await self.refresh(name)
            if after.last_error_at is not before.last_error_at:
                failed += 1
        logger.info("Refreshed %d widgets (%d failed)", len(WIDGET_NAMES), failed)
        return dict(self._snapshots)
