import httpx
import pytest
from fastapi.testclient import TestClient

from main import app, get_location_service, get_quote_service, get_sunrise_sunset_service
from models import Location, Quote, SunriseSunset


class FakeQuoteService:
    """Returns a canned quote, or raises the configured error."""

    def __init__(self, content: str = "content", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls = 0

    async def get(self) -> Quote:
        self.calls += 1
        if self.error:
            raise self.error
        return Quote(content=self.content)


class FakeLocationService:
    def __init__(self, location: Location | None = None, error: Exception | None = None):
        self.location = location
        self.error = error
        self.addresses = []

    async def from_address(self, address: str) -> Location:
        self.addresses.append(address)
        if self.error:
            raise self.error
        return self.location


class FakeSunriseSunsetService:
    def __init__(self, result: SunriseSunset | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.locations = []

    async def from_location(self, location: Location) -> SunriseSunset:
        self.locations.append(location)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def quote_service():
    return FakeQuoteService()


@pytest.fixture
def location_service():
    return FakeLocationService()


@pytest.fixture
def sunrise_sunset_service():
    return FakeSunriseSunsetService()


@pytest.fixture
def client(quote_service, location_service, sunrise_sunset_service):
    """TestClient with the upstream services swapped for fakes."""
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    app.dependency_overrides[get_location_service] = lambda: location_service
    app.dependency_overrides[get_sunrise_sunset_service] = lambda: sunrise_sunset_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler instead of the network."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
