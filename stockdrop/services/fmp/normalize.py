"""Map FMP payload shapes onto Quote / HistoricalSeries.

One parser per upstream shape:
- quote: ``[{symbol, price, change, changesPercentage, ...}]``
- historical-light: ``[{symbol, date, price, volume}]`` (newest first)
- historical-full: ``{symbol, historical: [{date, open, high, low, close, ...}]}``
- screener: ``[{symbol, companyName, sector, ...}]``
- search: ``[{symbol, name, currency, exchangeShortName}]``
- intraday chart: ``[{date, open, high, low, close, volume}]`` (newest first)
- stock news: ``[{symbol, publishedDate, title, url, site, text, image}]``

Every failure raises NormalizationError. Empty quote and history payloads
are failures too: an empty list must never turn into a zero-valued quote.
Search, chart and news lists may legitimately be empty.
"""

import logging
import math
from datetime import date, datetime, time, timezone
from typing import Any

from stockdrop.models.market import IntradayBar, NewsItem, SearchResult
from stockdrop.models.quote import (
    HistoricalPoint,
    HistoricalSeries,
    NormalizationError,
    Quote,
    SourceKind,
)

logger = logging.getLogger(__name__)

# FMP has used all three spellings across API versions.
_PERCENT_KEYS = ("changesPercentage", "changePercentage", "changePercent")


def _to_float(val: Any) -> float | None:
    """Parse a number, treating NaN/Infinity and garbage as missing."""
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        result = float(val)
    elif isinstance(val, str):
        try:
            result = float(val)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def _to_int(val: Any) -> int | None:
    parsed = _to_float(val)
    return int(parsed) if parsed is not None else None


def _parse_date(val: Any, symbol: str) -> date:
    try:
        return date.fromisoformat(str(val)[:10])
    except ValueError:
        raise NormalizationError(f"{symbol}: invalid date {val!r}") from None


def _epoch_to_utc(ts: int | None, symbol: str) -> datetime:
    """Convert epoch seconds to UTC; missing or unusable values become receipt time."""
    if ts:
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.warning("%s: ignoring out-of-range timestamp %r", symbol, ts)
    return datetime.now(timezone.utc)


def _quote_from_row(row: Any, symbol: str) -> Quote:
    if not isinstance(row, dict):
        raise NormalizationError(f"{symbol}: quote row is not an object")

    sym = str(row.get("symbol") or symbol).upper()
    price = _to_float(row.get("price"))
    if price is None:
        raise NormalizationError(f"{sym}: quote has no price")

    previous_close = _to_float(row.get("previousClose"))
    change = _to_float(row.get("change"))
    change_pct = next(
        (v for v in (_to_float(row.get(k)) for k in _PERCENT_KEYS) if v is not None), None,
    )

    # Derive what is missing from the previous close when possible
    if change is None and previous_close is not None:
        change = price - previous_close
    if change_pct is None and change is not None and previous_close:
        change_pct = change / previous_close * 100
    if change is None or change_pct is None:
        raise NormalizationError(f"{sym}: quote has no change / change percent")

    as_of = _epoch_to_utc(_to_int(row.get("timestamp")), sym)

    return Quote(
        symbol=sym,
        price=price,
        change=change,
        change_percent=change_pct,
        as_of=as_of,
        source=SourceKind.QUOTE,
        name=row.get("name") or None,
        open=_to_float(row.get("open")),
        day_high=_to_float(row.get("dayHigh")),
        day_low=_to_float(row.get("dayLow")),
        previous_close=previous_close,
        volume=_to_int(row.get("volume")),
    )


def parse_quote(payload: Any, symbol: str) -> Quote:
    """Parse a single-symbol quote payload."""
    if not isinstance(payload, list):
        raise NormalizationError(f"{symbol}: quote payload is not a list")
    if not payload:
        raise NormalizationError(f"{symbol}: quote payload is empty")

    # Rows without a symbol field are taken to be the requested one
    wanted = symbol.upper()
    row = next(
        (
            r for r in payload
            if isinstance(r, dict) and str(r.get("symbol") or wanted).upper() == wanted
        ),
        None,
    )
    if row is None:
        raise NormalizationError(f"{wanted}: quote payload has no row for this symbol")
    return _quote_from_row(row, wanted)


def normalize_quote_rows(payload: Any) -> list[Quote]:
    """Parse a multi-symbol quote payload, skipping (and logging) bad rows."""
    if not isinstance(payload, list):
        raise NormalizationError("batch quote payload is not a list")
    if not payload:
        raise NormalizationError("batch quote payload is empty")

    quotes = []
    skipped: list[str] = []
    for row in payload:
        sym = str(row.get("symbol", "?")) if isinstance(row, dict) else "?"
        try:
            quotes.append(_quote_from_row(row, sym))
        except NormalizationError as exc:
            skipped.append(sym)
            logger.debug("Skipping quote row: %s", exc)

    if skipped:
        logger.warning(
            "Skipped %d/%d malformed quote rows: %s",
            len(skipped), len(payload), ", ".join(skipped[:10]),
        )
    return quotes


def _build_series(symbol: str, source: SourceKind, points: list[HistoricalPoint]) -> HistoricalSeries:
    """Sort ascending and drop duplicate dates (first occurrence wins)."""
    seen: dict[date, HistoricalPoint] = {}
    for p in points:
        seen.setdefault(p.date, p)
    ordered = tuple(sorted(seen.values(), key=lambda p: p.date))
    return HistoricalSeries(symbol=symbol.upper(), source=source, points=ordered)


def parse_light_series(payload: Any, symbol: str) -> HistoricalSeries:
    if not isinstance(payload, list):
        raise NormalizationError(f"{symbol}: light history payload is not a list")
    if not payload:
        raise NormalizationError(f"{symbol}: light history is empty")

    points = []
    for row in payload:
        if not isinstance(row, dict):
            raise NormalizationError(f"{symbol}: light history row is not an object")
        price = _to_float(row.get("price", row.get("close")))
        if price is None:
            raise NormalizationError(f"{symbol}: light history row has no price")
        points.append(HistoricalPoint(
            date=_parse_date(row.get("date"), symbol),
            close=price,
            volume=_to_int(row.get("volume")),
        ))
    return _build_series(symbol, SourceKind.HISTORICAL_LIGHT, points)


def parse_full_series(payload: Any, symbol: str) -> HistoricalSeries:
    if not isinstance(payload, dict):
        raise NormalizationError(f"{symbol}: full history payload is not an object")
    rows = payload.get("historical")
    if not isinstance(rows, list) or not rows:
        raise NormalizationError(f"{symbol}: full history is empty")

    points = []
    for row in rows:
        if not isinstance(row, dict):
            raise NormalizationError(f"{symbol}: full history row is not an object")
        close = _to_float(row.get("close"))
        if close is None:
            raise NormalizationError(f"{symbol}: full history row has no close")
        points.append(HistoricalPoint(
            date=_parse_date(row.get("date"), symbol),
            close=close,
            open=_to_float(row.get("open")),
            high=_to_float(row.get("high")),
            low=_to_float(row.get("low")),
            volume=_to_int(row.get("volume")),
        ))
    return _build_series(str(payload.get("symbol") or symbol), SourceKind.HISTORICAL_FULL, points)


def quote_from_series(series: HistoricalSeries) -> Quote:
    """Use the latest point as the current price, diffed against the one before.

    A single-point series yields zero change.
    """
    latest = series.latest
    if len(series.points) == 1:
        change, change_pct, previous = 0.0, 0.0, None
    else:
        previous = series.points[-2].close
        change = latest.close - previous
        if previous == 0:
            if change != 0:
                raise NormalizationError(f"{series.symbol}: previous close is zero")
            change_pct = 0.0
        else:
            change_pct = change / previous * 100

    return Quote(
        symbol=series.symbol,
        price=latest.close,
        change=change,
        change_percent=change_pct,
        as_of=datetime.combine(latest.date, time(), tzinfo=timezone.utc),
        source=series.source,
        open=latest.open,
        day_high=latest.high,
        day_low=latest.low,
        previous_close=previous,
        volume=latest.volume,
    )


def parse_screener_symbols(payload: Any) -> list[str]:
    """Return screener symbols in upstream order, de-duplicated."""
    if not isinstance(payload, list):
        raise NormalizationError("screener payload is not a list")
    symbols = (
        str(row.get("symbol")).strip().upper()
        for row in payload
        if isinstance(row, dict) and row.get("symbol")
    )
    return list(dict.fromkeys(s for s in symbols if s))


def parse_search_results(payload: Any) -> list[SearchResult]:
    """Return search hits in upstream order, one per symbol."""
    if not isinstance(payload, list):
        raise NormalizationError("search payload is not a list")
    results: dict[str, SearchResult] = {}
    for row in payload:
        if not isinstance(row, dict) or not row.get("symbol"):
            continue
        sym = str(row["symbol"]).strip().upper()
        results.setdefault(sym, SearchResult(
            symbol=sym,
            name=str(row.get("name") or ""),
            currency=row.get("currency") or None,
            exchange=row.get("exchangeShortName") or row.get("stockExchange") or None,
        ))
    return list(results.values())


def _parse_datetime(val: Any) -> datetime | None:
    try:
        return datetime.fromisoformat(str(val))
    except ValueError:
        return None


def parse_intraday_chart(payload: Any, limit: int | None = None) -> list[IntradayBar]:
    """Parse intraday bars (newest first upstream) into ascending order.

    Only the newest ``limit`` bars are kept. Timestamps are exchange-local,
    exactly as FMP sends them. Rows without a usable time or close are skipped.
    """
    if not isinstance(payload, list):
        raise NormalizationError("intraday chart payload is not a list")

    bars: dict[datetime, IntradayBar] = {}
    for row in payload:
        if not isinstance(row, dict):
            continue
        ts = _parse_datetime(row.get("date"))
        close = _to_float(row.get("close"))
        if ts is None or close is None:
            continue
        bars.setdefault(ts, IntradayBar(
            timestamp=ts,
            close=close,
            open=_to_float(row.get("open")),
            high=_to_float(row.get("high")),
            low=_to_float(row.get("low")),
            volume=_to_int(row.get("volume")),
        ))

    newest = sorted(bars.values(), key=lambda b: b.timestamp, reverse=True)
    if limit is not None:
        newest = newest[:limit]
    return newest[::-1]


def parse_news(payload: Any) -> list[NewsItem]:
    """Parse stock news rows; rows without a title or url are skipped."""
    if not isinstance(payload, list):
        raise NormalizationError("news payload is not a list")
    items = []
    for row in payload:
        if not isinstance(row, dict) or not row.get("title") or not row.get("url"):
            continue
        items.append(NewsItem(
            title=str(row["title"]),
            url=str(row["url"]),
            published_at=_parse_datetime(row.get("publishedDate")) if row.get("publishedDate") else None,
            site=row.get("site") or None,
            summary=row.get("text") or None,
            image=row.get("image") or None,
        ))
    return items


_SERIES_PARSERS = {
    SourceKind.HISTORICAL_LIGHT: parse_light_series,
    SourceKind.HISTORICAL_FULL: parse_full_series,
}


def normalize_series(payload: Any, source: SourceKind, symbol: str) -> HistoricalSeries:
    """Normalize a history payload into a HistoricalSeries."""
    parser = _SERIES_PARSERS.get(source)
    if parser is None:
        raise ValueError(f"{source.value} payloads do not carry a series")
    return parser(payload, symbol)


def normalize(payload: Any, source: SourceKind, symbol: str) -> Quote:
    """Normalize any quote-capable payload into a single Quote."""
    if source is SourceKind.QUOTE:
        return parse_quote(payload, symbol)
    return quote_from_series(normalize_series(payload, source, symbol))
