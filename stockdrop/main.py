import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import Depends, FastAPI

from stockdrop.config import settings as app_settings
from stockdrop.routers import commodities, history, movers, quotes, search, widgets
from stockdrop.routers.deps import get_quote_service
from stockdrop.schemas.quote import UpstreamHealthResponse
from stockdrop.services.fmp import QuoteClient
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.widget_service import WidgetService

logger = logging.getLogger(__name__)
scheduler = AsyncIOScheduler()


async def scheduled_widget_refresh(widget_service: WidgetService):
    """Background job: refresh every home-screen widget snapshot."""
    logger.info("Running scheduled widget refresh...")
    try:
        await widget_service.refresh_all()
    except Exception:
        logger.exception("Scheduled widget refresh failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger("stockdrop").setLevel(app_settings.log_level.upper())
    # httpx logs full request URLs at INFO, and those carry the apikey param
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not app_settings.fmp_api_key:
        logger.warning("FMP_API_KEY is not set; every upstream call will fail with auth_error")

    client = QuoteClient(app_settings.fmp_api_key, base_url=app_settings.fmp_base_url)
    app.state.quote_service = QuoteService(client, app_settings)
    app.state.widget_service = WidgetService(app.state.quote_service, app_settings)

    if app_settings.widget_refresh_seconds > 0:
        scheduler.add_job(
            scheduled_widget_refresh,
            IntervalTrigger(seconds=app_settings.widget_refresh_seconds),
            args=[app.state.widget_service],
            id="widget_refresh",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(f"Scheduler started, widget refresh every {app_settings.widget_refresh_seconds}s")

    yield

    if scheduler.running:
        scheduler.shutdown(wait=False)


app = FastAPI(
    title="StockDrop",
    summary="Stock and commodity quotes from Financial Modeling Prep, with fallbacks.",
    description=(
        "StockDrop serves stock and commodity (gold, silver, oil) prices to the app "
        "screens and the home-screen widgets.\n\n"
        "**Key concepts:**\n"
        "- Every quote is resolved through an ordered fallback chain: the FMP quote "
        "endpoint first, the light daily history second. Gold and silver end in a demo "
        "quote so their widgets never go blank. The `source` field says which entry answered.\n"
        "- Failures are classified as `network_error`, `rate_limited`, `auth_error`, "
        "`upstream_error` or `parse_error`. When a whole chain fails, the kind of the *last* "
        "attempt is reported.\n"
        "- Movers are picked from a screener batch by signed percentage change; ties go to "
        "the first symbol listed.\n"
        "- Widget snapshots are refreshed in the background and keep the last good quote "
        "when a refresh fails.\n"
    ),
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "quotes",
            "description": "Current quotes for single symbols (with history fallback), comma-separated batches, and the detail page (quote, 5-minute chart, news).",
        },
        {
            "name": "commodities",
            "description": "Gold, silver and Brent crude quotes in USD. Gold and silver fall back to demo data.",
        },
        {
            "name": "history",
            "description": "Daily price history with period statistics: full OHLC first, light closes as a fallback.",
        },
        {
            "name": "movers",
            "description": "Biggest gainer/decliner and ranked losers list from a liquid-stock screener batch.",
        },
        {
            "name": "search",
            "description": "Symbol and company-name lookup.",
        },
        {
            "name": "widgets",
            "description": "Home-screen widget snapshots (top-decline, gold, silver, oil), refreshed in the background.",
        },
        {
            "name": "system",
            "description": "Health checks and operational endpoints.",
        },
    ],
)

app.include_router(quotes.router)
app.include_router(commodities.router)
app.include_router(history.router)
app.include_router(movers.router)
app.include_router(search.router)
app.include_router(widgets.router)


@app.get("/api/health", summary="Health check", tags=["system"])
async def health():
    """Return `{\"status\": \"ok\"}` when the service is running."""
    return {"status": "ok"}


@app.get(
    "/api/health/upstream",
    response_model=UpstreamHealthResponse,
    summary="Check FMP availability",
    tags=["system"],
)
async def upstream_health(svc: QuoteService = Depends(get_quote_service)):
    """Probe the FMP quote endpoint with a known symbol and report the failure kind, if any."""
    error = await svc.check_upstream()
    return UpstreamHealthResponse(healthy=error is None, error=error.value if error else None)
