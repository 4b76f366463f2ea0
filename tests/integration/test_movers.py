"""Tests for the movers router."""

import pytest

from tests.helpers import quote_row

pytestmark = pytest.mark.asyncio(loop_scope="function")


@pytest.fixture(autouse=True)
def screened(fmp):
    fmp.add("/stock-screener", json=[{"symbol": s} for s in ("AAPL", "MSFT", "TSLA")])
    fmp.add("/quote/AAPL,MSFT", json=[
        quote_row("AAPL", 180.0, -9.86, -5.2),
        quote_row("MSFT", 415.0, -4.19, -1.0),
    ])
    fmp.add("/quote/TSLA", json=[quote_row("TSLA", 257.5, 7.5, 3.0)])


async def test_top_decline_default(client):
    resp = await client.get("/api/movers/top")
    assert resp.status_code == 200
    assert resp.json()["symbol"] == "AAPL"


async def test_top_gain(client):
    resp = await client.get("/api/movers/top", params={"direction": "gain"})
    assert resp.json()["symbol"] == "TSLA"


async def test_invalid_direction(client):
    resp = await client.get("/api/movers/top", params={"direction": "sideways"})
    assert resp.status_code == 422


async def test_empty_screener_returns_null(client, fmp):
    fmp.add("/stock-screener", json=[])
    resp = await client.get("/api/movers/top")
    assert resp.status_code == 200
    assert resp.json() is None


async def test_losers(client):
    resp = await client.get("/api/movers/losers", params={"threshold": -0.5, "limit": 10})
    assert resp.status_code == 200
    assert [q["symbol"] for q in resp.json()] == ["AAPL", "MSFT"]


async def test_losers_default_threshold(client):
    resp = await client.get("/api/movers/losers")
    assert [q["symbol"] for q in resp.json()] == ["AAPL"]


async def test_losers_exclude_drop_equal_to_threshold(client):
    resp = await client.get("/api/movers/losers", params={"threshold": -1})
    assert [q["symbol"] for q in resp.json()] == ["AAPL"]


async def test_screener_rate_limited(client, fmp):
    fmp.add("/stock-screener", json={}, status=429)
    resp = await client.get("/api/movers/losers")
    assert resp.status_code == 429
