from pydantic import BaseModel, Field


class SearchResultResponse(BaseModel):
    symbol: str = Field(description="Ticker symbol")
    name: str = Field(description="Company or instrument name")
    currency: str | None = Field(default=None, description="Trading currency")
    exchange: str | None = Field(default=None, description="Exchange short name (e.g. NASDAQ)")

    model_config = {"from_attributes": True}
