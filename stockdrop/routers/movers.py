from fastapi import APIRouter, Depends, Query

from stockdrop.models.quote import QuoteFetchError
from stockdrop.routers.deps import fetch_error, get_quote_service
from stockdrop.schemas.quote import QuoteResponse
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.ranking import Direction

router = APIRouter(prefix="/api/movers", tags=["movers"])


@router.get("/top", response_model=QuoteResponse | None, summary="Get the biggest mover of a screener batch")
async def get_top_mover(
    direction: Direction = Query(Direction.MAX_DECLINE, description="decline for the worst performer, gain for the best"),
    sector: str | None = Query(None, description="FMP sector filter (e.g. Technology)"),
    limit: int | None = Query(None, ge=1, le=500, description="Screener batch size"),
    svc: QuoteService = Depends(get_quote_service),
):
    """Screen liquid stocks, quote them, and return the single extreme mover.

    Returns `null` when the screener or the quote batch came back empty.
    Ties go to the symbol the screener listed first.
    """
    try:
        quote = await svc.get_top_mover(direction, sector=sector, limit=limit)
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return QuoteResponse.from_quote(quote) if quote else None


@router.get("/losers", response_model=list[QuoteResponse], summary="Get the day's biggest losers")
async def get_losers(
    threshold: float = Query(-5.0, le=0, description="Only include drops strictly below this percentage"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of losers"),
    sector: str | None = Query(None, description="FMP sector filter"),
    svc: QuoteService = Depends(get_quote_service),
):
    """Screened stocks that fell more than `threshold` percent, steepest first.

    Only the first 30 screener symbols are quoted.
    """
    try:
        quotes = await svc.get_losers(threshold=threshold, count=limit, sector=sector)
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return [QuoteResponse.from_quote(q) for q in quotes]
