from fastapi import APIRouter, Depends

from stockdrop.constants import COMMODITY_NAMES, CommodityKind
from stockdrop.models.quote import QuoteFetchError
from stockdrop.routers.deps import fetch_error, get_quote_service
from stockdrop.schemas.quote import QuoteResponse
from stockdrop.services.quote_service import QuoteService

router = APIRouter(prefix="/api/commodities", tags=["commodities"])


@router.get("/{kind}", response_model=QuoteResponse, summary="Get a commodity quote")
async def get_commodity(kind: CommodityKind, svc: QuoteService = Depends(get_quote_service)):
    """Resolve the USD quote for gold, silver or Brent crude oil.

    Gold and silver fall back to a demo quote (`source: placeholder`) when
    every live source fails; oil reports the error instead.
    """
    try:
        quote = await svc.get_commodity(kind)
    except QuoteFetchError as exc:
        raise fetch_error(exc) from exc
    return QuoteResponse.from_quote(quote, name=COMMODITY_NAMES.get(quote.symbol))
