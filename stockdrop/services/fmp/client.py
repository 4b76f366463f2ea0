"""HTTP client for the Financial Modeling Prep API.

One call, one GET: the client never retries. Failures come back as a
classified FetchOutcome instead of an exception so callers (the fallback
resolver in particular) can decide what to do next.
"""

import asyncio
import logging
from typing import Any

import httpx

from stockdrop.models.quote import ErrorKind, FetchOutcome
from stockdrop.services.fmp.endpoints import EndpointSpec

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://financialmodelingprep.com/api/v3"


def classify_status(status_code: int) -> ErrorKind | None:
    """Map an HTTP status to an ErrorKind, or None for 2xx."""
    if 200 <= status_code < 300:
        return None
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code in (401, 403):
        return ErrorKind.AUTH_ERROR
    return ErrorKind.UPSTREAM_ERROR


def _embedded_error(payload: Any) -> FetchOutcome | None:
    """FMP sometimes answers 200 with {"Error Message": "..."} instead of data."""
    if not isinstance(payload, dict) or "Error Message" not in payload:
        return None
    message = str(payload["Error Message"])
    if "api key" in message.lower() or "apikey" in message.lower():
        return FetchOutcome.failure(ErrorKind.AUTH_ERROR, message[:200])
    if "limit" in message.lower():
        return FetchOutcome.failure(ErrorKind.RATE_LIMITED, message[:200])
    return FetchOutcome.failure(ErrorKind.UPSTREAM_ERROR, message[:200])


class QuoteClient:
    """Fetches raw JSON payloads from FMP.

    Parameters:
        api_key: FMP API key, appended to every request.
        base_url: API root (defaults to the public v3 API).
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._transport = transport

    async def fetch(self, endpoint: EndpointSpec, symbol: str, timeout: float) -> FetchOutcome[Any]:
        """GET ``endpoint`` for ``symbol``, bounded by ``timeout`` seconds in total."""
        if not self._api_key:
            logger.warning("FMP %s for %s skipped: no API key configured", endpoint.name, symbol)
            return FetchOutcome.failure(ErrorKind.AUTH_ERROR, "FMP API key is not configured")

        path, params = endpoint.build(symbol)
        params["apikey"] = self._api_key

        try:
            resp = await asyncio.wait_for(self._get(path, params, timeout), timeout=timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning("FMP %s for %s timed out after %.1fs", endpoint.name, symbol, timeout)
            return FetchOutcome.failure(ErrorKind.NETWORK_ERROR, f"timed out after {timeout}s")
        except httpx.RequestError as exc:
            logger.warning("FMP %s for %s failed: %s", endpoint.name, symbol, type(exc).__name__)
            return FetchOutcome.failure(ErrorKind.NETWORK_ERROR, type(exc).__name__)

        kind = classify_status(resp.status_code)
        if kind is not None:
            logger.warning("FMP %s for %s returned HTTP %d", endpoint.name, symbol, resp.status_code)
            return FetchOutcome.failure(kind, f"HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("FMP %s for %s returned malformed JSON", endpoint.name, symbol)
            return FetchOutcome.failure(ErrorKind.PARSE_ERROR, "malformed JSON body")

        if payload is None:
            return FetchOutcome.failure(ErrorKind.PARSE_ERROR, "null JSON body")

        embedded = _embedded_error(payload)
        if embedded is not None:
            logger.warning("FMP %s for %s reported an error: %s", endpoint.name, symbol, embedded.detail)
            return embedded

        return FetchOutcome.success(payload)

    async def _get(self, path: str, params: dict[str, str], timeout: float) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, transport=self._transport,
        ) as client:
            return await client.get(path, params=params)
