from fastapi import APIRouter, Depends, HTTPException, Query

from stockdrop.constants import PeriodType
from stockdrop.models.quote import QuoteFetchError
from stockdrop.routers.deps import fetch_error, get_quote_service
from stockdrop.schemas.history import HistoricalSeriesResponse
from stockdrop.services.quote_service import QuoteService

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("/{symbol}", response_model=HistoricalSeriesResponse, summary="Get daily price history")
async def get_history(
    symbol: str,
    period: PeriodType = Query("3mo", description="Lookback window"),
    svc: QuoteService = Depends(get_quote_service),
):
    """Daily closes for a symbol, ascending by date.

    Full OHLC history is preferred; light `{date, price}` history is the
    fallback, in which case only `close` and `volume` are populated.
    """
    try:
        series = await svc.get_history(symbol, period)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return HistoricalSeriesResponse.from_series(series)
