from fastapi import APIRouter, Depends, HTTPException, Query

from stockdrop.models.quote import QuoteFetchError
from stockdrop.routers.deps import fetch_error, get_quote_service
from stockdrop.schemas.details import StockDetailsResponse
from stockdrop.schemas.quote import ErrorDetail, QuoteResponse
from stockdrop.services.quote_service import QuoteService, parse_symbols

router = APIRouter(prefix="/api/quotes", tags=["quotes"])

_ERRORS = {
    429: {"model": ErrorDetail, "description": "FMP rate limit reached"},
    502: {"model": ErrorDetail, "description": "Upstream, auth or payload error"},
    504: {"model": ErrorDetail, "description": "FMP unreachable or timed out"},
}


@router.get("", response_model=list[QuoteResponse], summary="Get quotes for several symbols", responses=_ERRORS)
async def get_quotes(
    symbols: str = Query(..., description="Comma-separated list of symbols"),
    svc: QuoteService = Depends(get_quote_service),
):
    """Fetch latest quotes for one or more symbols (e.g. `AAPL,MSFT,GOOGL`).

    Symbols are requested from FMP in batches of ten. Batches that fail are
    skipped, so the response may hold fewer quotes than requested; an error
    is returned only when every batch failed.
    """
    symbol_list = parse_symbols(symbols)
    if not symbol_list:
        return []
    try:
        quotes = await svc.get_quotes(symbol_list)
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return [QuoteResponse.from_quote(q) for q in quotes]


@router.get("/{symbol}", response_model=QuoteResponse, summary="Get a quote for one symbol", responses=_ERRORS)
async def get_quote(symbol: str, svc: QuoteService = Depends(get_quote_service)):
    """Resolve the current quote for a symbol.

    The quote endpoint is tried first; when it fails, the latest point of the
    light daily history is used instead (with change computed against the
    previous day). The `source` field tells which one answered.
    """
    try:
        quote = await svc.get_quote(symbol)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return QuoteResponse.from_quote(quote)


@router.get(
    "/{symbol}/details",
    response_model=StockDetailsResponse,
    summary="Get quote, intraday chart and news for one symbol",
    responses={404: {"description": "No source has data for the symbol"}, **_ERRORS},
)
async def get_details(symbol: str, svc: QuoteService = Depends(get_quote_service)):
    """Detail page data: the resolved quote, the latest 5-minute bars and recent news.

    Chart and news are optional: when FMP fails to deliver them the lists are
    empty and the quote is still returned.
    """
    try:
        details = await svc.get_details(symbol)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    except LookupError as exc:
        raise HTTPException(404, str(exc))
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return StockDetailsResponse.from_details(details)
