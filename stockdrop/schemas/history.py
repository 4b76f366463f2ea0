import datetime

from pydantic import BaseModel, Field

from stockdrop.models.quote import HistoricalSeries
from stockdrop.services.compute import summarize_series


class HistoricalPointResponse(BaseModel):
    date: datetime.date = Field(description="Trading date")
    close: float = Field(description="Closing price")
    open: float | None = Field(default=None, description="Opening price (full history only)")
    high: float | None = Field(default=None, description="Highest price of the day (full history only)")
    low: float | None = Field(default=None, description="Lowest price of the day (full history only)")
    volume: int | None = Field(default=None, description="Trading volume")

    model_config = {"from_attributes": True}


class HistorySummaryResponse(BaseModel):
    start: datetime.date = Field(description="First trading date in the window")
    end: datetime.date = Field(description="Last trading date in the window")
    first_close: float = Field(description="Close on the first date")
    last_close: float = Field(description="Close on the last date")
    change: float = Field(description="Absolute change over the window")
    change_pct: float | None = Field(default=None, description="Percentage change over the window, rounded to 2 decimals")
    high: float = Field(description="Highest price in the window (closes when no intraday range is known)")
    low: float = Field(description="Lowest price in the window (closes when no intraday range is known)")
    avg_volume: int | None = Field(default=None, description="Mean daily volume, when reported")


class HistoricalSeriesResponse(BaseModel):
    symbol: str = Field(description="Ticker symbol")
    source: str = Field(description="historical-full or historical-light")
    points: list[HistoricalPointResponse] = Field(description="Daily points, ascending by date")
    summary: HistorySummaryResponse = Field(description="Statistics over the whole window")

    @classmethod
    def from_series(cls, series: HistoricalSeries) -> "HistoricalSeriesResponse":
        return cls(
            symbol=series.symbol,
            source=series.source.value,
            points=[HistoricalPointResponse.model_validate(p) for p in series.points],
            summary=HistorySummaryResponse(**summarize_series(series)),
        )
