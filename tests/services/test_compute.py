"""Tests for period statistics over a price series."""

import math
from datetime import date

from stockdrop.models.quote import HistoricalPoint, HistoricalSeries, SourceKind
from stockdrop.services.compute import summarize_series


def _series(*points: HistoricalPoint, source=SourceKind.HISTORICAL_FULL) -> HistoricalSeries:
    return HistoricalSeries("AAPL", source, points)


class TestSummarizeSeries:
    def test_ohlc_range_and_change(self):
        s = _series(
            HistoricalPoint(date(2025, 1, 13), 100.0, open=99.0, high=104.0, low=98.0, volume=1000),
            HistoricalPoint(date(2025, 1, 14), 95.0, open=100.0, high=101.0, low=90.0, volume=3000),
        )
        summary = summarize_series(s)
        assert summary["start"] == date(2025, 1, 13)
        assert summary["end"] == date(2025, 1, 14)
        assert summary["change"] == -5.0
        assert summary["change_pct"] == -5.0
        assert (summary["high"], summary["low"]) == (104.0, 90.0)
        assert summary["avg_volume"] == 2000

    def test_light_series_uses_closes_for_range(self):
        s = _series(
            HistoricalPoint(date(2025, 1, 13), 10.0),
            HistoricalPoint(date(2025, 1, 14), 12.0),
            HistoricalPoint(date(2025, 1, 15), 11.0),
            source=SourceKind.HISTORICAL_LIGHT,
        )
        summary = summarize_series(s)
        assert (summary["high"], summary["low"]) == (12.0, 10.0)
        assert summary["avg_volume"] is None

    def test_zero_first_close_has_no_percentage(self):
        s = _series(HistoricalPoint(date(2025, 1, 13), 0.0), HistoricalPoint(date(2025, 1, 14), 1.0))
        summary = summarize_series(s)
        assert summary["change"] == 1.0
        assert summary["change_pct"] is None

    def test_single_point(self):
        summary = summarize_series(_series(HistoricalPoint(date(2025, 1, 13), 7.0, volume=5)))
        assert summary["change"] == 0.0
        assert summary["change_pct"] == 0.0
        assert summary["start"] == summary["end"]
        assert not math.isnan(summary["high"])
