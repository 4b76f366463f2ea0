from fastapi import APIRouter, Depends, Query

from stockdrop.models.quote import QuoteFetchError
from stockdrop.routers.deps import fetch_error, get_quote_service
from stockdrop.schemas.search import SearchResultResponse
from stockdrop.services.quote_service import QuoteService

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=list[SearchResultResponse], summary="Search symbols")
async def search_symbols(
    q: str = Query("", description="Ticker or company name fragment"),
    svc: QuoteService = Depends(get_quote_service),
):
    """Look up symbols by ticker or company name. A blank query returns an empty list."""
    try:
        results = await svc.search(q)
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return [SearchResultResponse.model_validate(r) for r in results]
