import datetime

from pydantic import BaseModel, Field

from stockdrop.models.quote import Quote


class QuoteResponse(BaseModel):
    symbol: str = Field(description="Ticker symbol (e.g. AAPL) or FMP commodity symbol (e.g. GCUSD)")
    name: str | None = Field(default=None, description="Display name, when the upstream payload carries one")
    price: float = Field(description="Latest price")
    change: float = Field(description="Absolute price change from previous close")
    change_percent: float = Field(description="Percentage change from previous close")
    trend: str = Field(description="Direction of the move: up, down, or neutral")
    as_of: datetime.datetime = Field(description="Upstream timestamp (UTC), or receipt time when none was given")
    source: str = Field(description="Where the quote came from: quote, historical-light, historical-full, or placeholder")
    open: float | None = Field(default=None, description="Session opening price")
    day_high: float | None = Field(default=None, description="Session high")
    day_low: float | None = Field(default=None, description="Session low")
    previous_close: float | None = Field(default=None, description="Previous session close price")
    volume: int | None = Field(default=None, description="Session trading volume")

    @classmethod
    def from_quote(cls, q: Quote, name: str | None = None) -> "QuoteResponse":
        return cls(
            symbol=q.symbol,
            name=q.name or name,
            price=q.price,
            change=q.change,
            change_percent=q.change_percent,
            trend=q.trend,
            as_of=q.as_of,
            source=q.source.value,
            open=q.open,
            day_high=q.day_high,
            day_low=q.day_low,
            previous_close=q.previous_close,
            volume=q.volume,
        )


class ErrorDetail(BaseModel):
    error: str = Field(description="Error kind: network_error, rate_limited, auth_error, upstream_error, or parse_error")
    message: str = Field(default="", description="Human-readable detail (never contains credentials)")


class UpstreamHealthResponse(BaseModel):
    healthy: bool = Field(description="Whether the FMP quote endpoint answered with usable data")
    error: str | None = Field(default=None, description="Error kind when unhealthy")
