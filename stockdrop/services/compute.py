"""Period statistics computed from a price series frame."""

from stockdrop.models.quote import HistoricalSeries


def summarize_series(series: HistoricalSeries) -> dict:
    """Summarize a daily series over its whole span.

    High/low fall back to closes where the series carries no intraday range
    (light history). ``change_pct`` is None when the first close is zero.
    """
    df = series.to_frame()
    closes = df["close"]
    first_close = float(closes.iloc[0])
    last_close = float(closes.iloc[-1])
    change = last_close - first_close

    highs = df["high"].fillna(closes)
    lows = df["low"].fillna(closes)
    volume = df["volume"].dropna()

    return {
        "start": df.index[0],
        "end": df.index[-1],
        "first_close": first_close,
        "last_close": last_close,
        "change": change,
        "change_pct": round(change / first_close * 100, 2) if first_close else None,
        "high": float(highs.max()),
        "low": float(lows.min()),
        "avg_volume": int(volume.mean()) if not volume.empty else None,
    }
