import pytest
from httpx import ASGITransport, AsyncClient

from stockdrop.config import Settings
from stockdrop.main import app
from stockdrop.routers.deps import get_quote_service, get_widget_service
from stockdrop.services.quote_service import QuoteService
from stockdrop.services.widget_service import WidgetService
from tests.helpers import TEST_API_KEY, FakeFmp


@pytest.fixture
def fmp():
    return FakeFmp()


@pytest.fixture
def test_settings():
    return Settings(
        fmp_api_key=TEST_API_KEY,
        quote_batch_size=2,
        quote_batch_concurrency=2,
        screener_limit=20,
        widget_symbols=["AAPL", "MSFT", "TSLA"],
        widget_refresh_seconds=0,
    )


@pytest.fixture
def quote_service(fmp, test_settings):
    return QuoteService(fmp.client(), test_settings)


@pytest.fixture
def widget_service(quote_service, test_settings):
    return WidgetService(quote_service, test_settings)


@pytest.fixture
async def client(quote_service, widget_service):
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    app.dependency_overrides[get_widget_service] = lambda: widget_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
