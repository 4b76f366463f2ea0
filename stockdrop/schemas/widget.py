import datetime

from pydantic import BaseModel, Field

from stockdrop.schemas.quote import QuoteResponse


class WidgetSnapshotResponse(BaseModel):
    name: str = Field(description="Widget name: top-decline, gold, silver, or oil")
    quote: QuoteResponse | None = Field(default=None, description="Last successfully fetched quote, null before the first success")
    refreshed_at: datetime.datetime | None = Field(default=None, description="When the quote was last refreshed successfully")
    last_error: str | None = Field(default=None, description="Error kind of the most recent failed refresh")
    last_error_at: datetime.datetime | None = Field(default=None, description="When the most recent refresh failed")
