"""Shared router dependencies and helpers."""

from fastapi import HTTPException, Request

from stockdrop.models.quote import ErrorKind, QuoteFetchError
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.widget_service import WidgetService

_STATUS_BY_KIND = {
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.NETWORK_ERROR: 504,
}


def get_quote_service(request: Request) -> QuoteService:
    """Return the QuoteService built at startup."""
    return request.app.state.quote_service


def get_widget_service(request: Request) -> WidgetService:
    """Return the WidgetService built at startup."""
    return request.app.state.widget_service


def fetch_error(exc: QuoteFetchError) -> HTTPException:
    """Translate a classified fetch failure into an HTTP error.

    rate_limited -> 429, network_error -> 504, anything else upstream -> 502.
    """
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(exc.kind, 502),
        detail={"error": exc.kind.value, "message": exc.detail},
    )
