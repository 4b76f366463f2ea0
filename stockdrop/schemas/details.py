import datetime

from pydantic import BaseModel, Field

from stockdrop.models.market import StockDetails
from stockdrop.schemas.quote import QuoteResponse


class IntradayBarResponse(BaseModel):
    timestamp: datetime.datetime = Field(description="Bar time, exchange-local as reported by FMP")
    close: float = Field(description="Closing price of the bar")
    open: float | None = Field(default=None, description="Opening price of the bar")
    high: float | None = Field(default=None, description="Bar high")
    low: float | None = Field(default=None, description="Bar low")
    volume: int | None = Field(default=None, description="Volume traded during the bar")

    model_config = {"from_attributes": True}


class NewsItemResponse(BaseModel):
    title: str = Field(description="Headline")
    url: str = Field(description="Link to the article")
    published_at: datetime.datetime | None = Field(default=None, description="Publication time")
    site: str | None = Field(default=None, description="Publisher")
    summary: str | None = Field(default=None, description="Article excerpt")
    image: str | None = Field(default=None, description="Thumbnail URL")

    model_config = {"from_attributes": True}


class StockDetailsResponse(BaseModel):
    quote: QuoteResponse
    chart: list[IntradayBarResponse] = Field(description="Recent 5-minute bars, ascending; empty when unavailable")
    news: list[NewsItemResponse] = Field(description="Latest headlines; empty when unavailable")

    @classmethod
    def from_details(cls, details: StockDetails) -> "StockDetailsResponse":
        return cls(
            quote=QuoteResponse.from_quote(details.quote),
            chart=[IntradayBarResponse.model_validate(b) for b in details.chart],
            news=[NewsItemResponse.model_validate(n) for n in details.news],
        )
