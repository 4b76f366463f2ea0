"""Tests for app startup wiring and the scheduled widget job."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from stockdrop.config import Settings
from stockdrop.main import lifespan, scheduled_widget_refresh
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.widget_service import WidgetService

pytestmark = pytest.mark.asyncio(loop_scope="function")


async def test_scheduled_refresh_calls_refresh_all():
    svc = MagicMock()
    svc.refresh_all = AsyncMock(return_value={})
    await scheduled_widget_refresh(svc)
    svc.refresh_all.assert_awaited_once()


async def test_scheduled_refresh_logs_and_swallows_job_errors(caplog):
    svc = MagicMock()
    svc.refresh_all = AsyncMock(side_effect=RuntimeError("boom"))
    await scheduled_widget_refresh(svc)
    assert "Scheduled widget refresh failed" in caplog.text


async def test_lifespan_builds_services_and_schedules_refresh():
    app = FastAPI()
    settings = Settings(fmp_api_key="k", widget_refresh_seconds=600)
    scheduler = MagicMock()
    scheduler.running = True

    with (
        patch("stockdrop.main.app_settings", settings),
        patch("stockdrop.main.scheduler", scheduler),
    ):
        async with lifespan(app):
            assert isinstance(app.state.quote_service, QuoteService)
            assert isinstance(app.state.widget_service, WidgetService)
            scheduler.add_job.assert_called_once()
            assert scheduler.add_job.call_args.kwargs["id"] == "widget_refresh"
            scheduler.start.assert_called_once()

    scheduler.shutdown.assert_called_once_with(wait=False)


async def test_lifespan_without_refresh_interval_skips_scheduler():
    app = FastAPI()
    settings = Settings(fmp_api_key="", widget_refresh_seconds=0)
    scheduler = MagicMock()
    scheduler.running = False

    with (
        patch("stockdrop.main.app_settings", settings),
        patch("stockdrop.main.scheduler", scheduler),
    ):
        async with lifespan(app):
            scheduler.add_job.assert_not_called()

    scheduler.shutdown.assert_not_called()
