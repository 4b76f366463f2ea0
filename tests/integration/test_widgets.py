"""Tests for the widgets router."""

import pytest

from tests.helpers import quote_row

pytestmark = pytest.mark.asyncio(loop_scope="function")


async def test_snapshot_empty_before_refresh(client):
    resp = await client.get("/api/widgets/oil")
    assert resp.status_code == 200
    assert resp.json() == {
        "name": "oil", "quote": None, "refreshed_at": None,
        "last_error": None, "last_error_at": None,
    }


async def test_refresh_then_get(client, fmp):
    fmp.add("/quote/BZUSD", json=[quote_row("BZUSD", 76.0, -4.0, -5.0, name=None)])
    resp = await client.post("/api/widgets/oil/refresh")
    assert resp.status_code == 200
    assert resp.json()["quote"]["name"] == "Crude Oil"

    resp = await client.get("/api/widgets/oil")
    assert resp.json()["quote"]["symbol"] == "BZUSD"
    assert resp.json()["refreshed_at"] is not None


async def test_failed_refresh_reports_error_and_keeps_quote(client, fmp):
    fmp.add("/quote/BZUSD", json=[quote_row("BZUSD", 76.0, -4.0, -5.0)])
    await client.post("/api/widgets/oil/refresh")

    fmp.add("/quote/BZUSD", json={}, status=500)
    resp = await client.post("/api/widgets/oil/refresh")
    assert resp.status_code == 200
    data = resp.json()
    assert data["quote"]["price"] == 76.0
    assert data["last_error"] == "upstream_error"


async def test_top_decline_demo(client):
    resp = await client.post("/api/widgets/top-decline/refresh")
    data = resp.json()
    assert data["quote"]["symbol"] == "META"
    assert data["quote"]["source"] == "placeholder"


async def test_unknown_widget(client):
    assert (await client.get("/api/widgets/bitcoin")).status_code == 404
    assert (await client.post("/api/widgets/bitcoin/refresh")).status_code == 404
