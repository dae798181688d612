"""
Shared fixtures: test settings and an Amadeus client wired to httpx.MockTransport.
"""

import random

import httpx
import pytest

from app.config import Settings
from app.services.amadeus_service import AmadeusService
from app.services.destination_service import DestinationCache
from app.services.flight_service import FlightService
from app.services.hotel_service import HotelService
from app.services.mock_service import MockTravelService

TOKEN_PATH = "/v1/security/oauth2/token"
BY_CITY_PATH = "/v1/reference-data/locations/hotels/by-city"
BY_HOTELS_PATH = "/v1/reference-data/locations/hotels/by-hotels"
HOTEL_OFFERS_PATH = "/v3/shopping/hotel-offers"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        amadeus_api_key="test-key",
        amadeus_api_secret="test-secret",
        amadeus_base_url="https://test.api.amadeus.com",
        enable_fallback_data=True,
    )


class FakeAmadeus:
    """
    Canned Amadeus responses keyed by path.

    A route value is either ``(status, json_body)`` or an exception
    instance to raise from the transport.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []
        self.token_calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == TOKEN_PATH and path not in self.routes:
            self.token_calls += 1
            return httpx.Response(200, json={"access_token": f"token-{self.token_calls}", "expires_in": 1799})

        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"errors": [{"status": 404, "detail": "No route mocked"}]})
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, json=body)

    def calls_to(self, path: str):
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
async def make_amadeus(settings):
    """Factory: (routes, settings=None) -> (AmadeusService, FakeAmadeus)."""
    created = []

    def factory(routes=None, custom_settings=None):
        fake = FakeAmadeus(routes)
        service = AmadeusService(custom_settings or settings, transport=httpx.MockTransport(fake))
        created.append(service)
        return service, fake

    yield factory

    for service in created:
        await service.close()


@pytest.fixture
def mock_data():
    return MockTravelService(random.Random(42))


@pytest.fixture
def make_hotel_service(make_amadeus, mock_data, settings):
    def factory(routes=None, custom_settings=None):
        amadeus, fake = make_amadeus(routes, custom_settings)
        service = HotelService(amadeus, DestinationCache(ttl_seconds=60), mock_data, custom_settings or settings)
        return service, fake

    return factory


@pytest.fixture
def make_flight_service(make_amadeus, mock_data, settings):
    def factory(routes=None, custom_settings=None):
        amadeus, fake = make_amadeus(routes, custom_settings)
        return FlightService(amadeus, mock_data, custom_settings or settings), fake

    return factory


def hotel_offer_item(hotel_id, total="250.00", available=True, name=None, offers=None):
    """One entry of a /v3/shopping/hotel-offers ``data`` array."""
    if offers is None:
        offers = [{
            "id": f"OFFER-{hotel_id}",
            "checkInDate": "2026-11-10",
            "checkOutDate": "2026-11-12",
            "price": {"currency": "EUR", "total": total, "base": "200.00"},
            "room": {
                "typeEstimated": {"category": "DELUXE_ROOM", "beds": 1, "bedType": "KING"},
                "description": {"text": "Deluxe king room with city view"},
            },
            "policies": {"cancellation": {"description": {"text": "Free cancellation until 48h before arrival"}}},
        }]
    return {
        "type": "hotel-offers",
        "available": available,
        "hotel": {"hotelId": hotel_id, "name": name or f"Hotel {hotel_id}", "cityCode": "PAR"},
        "offers": offers,
    }
