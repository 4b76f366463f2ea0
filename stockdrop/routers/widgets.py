from fastapi import APIRouter, Depends, HTTPException

from stockdrop.constants import COMMODITY_NAMES
from stockdrop.routers.deps import get_widget_service
from stockdrop.schemas.quote import QuoteResponse
from stockdrop.schemas.widget import WidgetSnapshotResponse
from stockdrop.services.widget_service import WidgetService, WidgetSnapshot

router = APIRouter(prefix="/api/widgets", tags=["widgets"])


def _to_response(snapshot: WidgetSnapshot) -> WidgetSnapshotResponse:
    quote = snapshot.quote
    return WidgetSnapshotResponse(
        name=snapshot.name,
        quote=QuoteResponse.from_quote(quote, name=COMMODITY_NAMES.get(quote.symbol)) if quote else None,
        refreshed_at=snapshot.refreshed_at,
        last_error=snapshot.last_error.value if snapshot.last_error else None,
        last_error_at=snapshot.last_error_at,
    )


@router.get("/{name}", response_model=WidgetSnapshotResponse, summary="Get a widget snapshot")
async def get_widget(name: str, svc: WidgetService = Depends(get_widget_service)):
    """Return the last successful snapshot for a home-screen widget.

    Snapshots are refreshed in the background; `quote` is null until the
    first successful refresh.
    """
    try:
        return _to_response(svc.get(name))
    except ValueError as exc:
        raise HTTPException(404, str(exc))


@router.post("/{name}/refresh", response_model=WidgetSnapshotResponse, summary="Refresh a widget now")
async def refresh_widget(name: str, svc: WidgetService = Depends(get_widget_service)):
    """Fetch fresh data for one widget.

    A failed refresh keeps the previous quote and fills in `last_error`.
    """
    try:
        snapshot = await svc.refresh(name)
    except ValueError as exc:
        raise HTTPException(404, str(exc))
    return _to_response(snapshot)
