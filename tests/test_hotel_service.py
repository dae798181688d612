"""
JetSet Backend Tests
Hotel search pipeline, fallback policy, offers, details and availability
"""

import httpx
import pytest

from app.models import DataSource
from app.services.errors import HotelNotFoundError, InvalidDateError
from tests.conftest import BY_CITY_PATH, BY_HOTELS_PATH, HOTEL_OFFERS_PATH, TOKEN_PATH, hotel_offer_item

CITY_HOTELS = {"data": [
    {"hotelId": "HLPAR001", "name": "TEST PROPERTY", "iataCode": "PAR"},
    {"hotelId": "HLPAR002", "name": "Hotel Lumiere", "iataCode": "PAR"},
    {"hotelId": "HLPAR003", "name": "Maison Bleue", "iataCode": "PAR"},
]}


# ============================================================
# Search
# ============================================================

@pytest.mark.anyio
async def test_search_returns_amadeus_hotels(make_hotel_service):
    service, fake = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": [
            hotel_offer_item("HLPAR002", total="210.00"),
            hotel_offer_item("HLPAR003", total="180.00"),
        ]}),
    })
    result = await service.search_hotels("par", "2026-11-10", "11/12/2026")

    assert result.source == DataSource.AMADEUS
    assert result.check_in_date == "2026-11-10"
    assert result.check_out_date == "2026-11-12"
    assert [h.hotel_id for h in result.data] == ["HLPAR002", "HLPAR003"]
    first = result.data[0]
    assert first.city_name == "Paris"
    assert first.formatted_price == "$210.00 EUR"
    assert first.offers[0].room_description == "Deluxe king room with city view"

    # Real properties are asked for first, sandbox properties last
    params = fake.calls_to(HOTEL_OFFERS_PATH)[0].url.params
    assert params["hotelIds"] == "HLPAR002,HLPAR003,HLPAR001"
    assert params["adults"] == "2"


@pytest.mark.anyio
async def test_search_skips_unavailable_hotels(make_hotel_service):
    service, _ = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": [
            hotel_offer_item("HLPAR002", available=False),
            hotel_offer_item("HLPAR003", offers=[]),
            hotel_offer_item("HLPAR001"),
        ]}),
    })
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert [h.hotel_id for h in result.data] == ["HLPAR001"]


@pytest.mark.anyio
async def test_search_caps_results(make_hotel_service, settings):
    capped = settings.model_copy(update={"max_hotel_results": 2})
    service, _ = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": [hotel_offer_item(f"HLPAR00{i}") for i in range(1, 4)]}),
    }, capped)
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert len(result.data) == 2


@pytest.mark.anyio
async def test_search_falls_back_when_auth_fails(make_hotel_service):
    service, _ = make_hotel_service({TOKEN_PATH: (401, {"error": "invalid_client"})})
    result = await service.search_hotels("DXB", "2026-11-10", "2026-11-12")

    assert result.source == DataSource.FALLBACK
    assert 5 <= len(result.data) <= 8
    assert all(h.hotel_id.startswith("dxb-") for h in result.data)
    assert result.data[0].city_name == "Dubai"


@pytest.mark.anyio
async def test_search_falls_back_on_transport_error(make_hotel_service):
    service, _ = make_hotel_service({BY_CITY_PATH: httpx.ReadTimeout("timed out")})
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert result.source == DataSource.FALLBACK
    assert result.data


@pytest.mark.anyio
async def test_search_falls_back_when_no_hotels(make_hotel_service):
    service, fake = make_hotel_service({BY_CITY_PATH: (200, {"data": []})})
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert result.source == DataSource.FALLBACK
    assert fake.calls_to(HOTEL_OFFERS_PATH) == []


@pytest.mark.anyio
async def test_search_falls_back_when_no_offers(make_hotel_service):
    service, _ = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": []}),
    })
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert result.source == DataSource.FALLBACK


@pytest.mark.anyio
async def test_search_without_fallback_returns_empty(make_hotel_service, settings):
    strict = settings.model_copy(update={"enable_fallback_data": False})
    service, _ = make_hotel_service({BY_CITY_PATH: (500, {"errors": [{"title": "SYSTEM ERROR"}]})}, strict)
    result = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")

    assert result.data == []


@pytest.mark.anyio
async def test_search_rejects_invalid_dates(make_hotel_service):
    service, fake = make_hotel_service()
    with pytest.raises(InvalidDateError):
        await service.search_hotels("PAR", "not-a-date", "2026-11-12")
    assert fake.requests == []


# ============================================================
# Offers
# ============================================================

@pytest.mark.anyio
async def test_get_hotel_offers(make_hotel_service):
    service, fake = make_hotel_service({HOTEL_OFFERS_PATH: (200, {"data": [hotel_offer_item("HLPAR002")]})})
    result = await service.get_hotel_offers("HLPAR002", "2026-11-10", "2026-11-12", adults=2, children=1)

    assert result.hotel["hotelId"] == "HLPAR002"
    assert result.offers[0].formatted_price == "$250.00 EUR"
    params = fake.calls_to(HOTEL_OFFERS_PATH)[0].url.params
    assert params["children"] == "1"


@pytest.mark.anyio
async def test_get_hotel_offers_empty(make_hotel_service):
    service, _ = make_hotel_service({HOTEL_OFFERS_PATH: (200, {"data": []})})
    result = await service.get_hotel_offers("HLPAR002", "2026-11-10", "2026-11-12")

    assert result.hotel is None
    assert result.offers == []


@pytest.mark.anyio
async def test_get_hotel_offers_falls_back_on_upstream_error(make_hotel_service):
    service, _ = make_hotel_service({HOTEL_OFFERS_PATH: (400, {"errors": [{"detail": "INVALID PROPERTY CODE"}]})})
    result = await service.get_hotel_offers("par-1", "2026-11-10", "2026-11-12")

    assert result.source == DataSource.FALLBACK
    assert result.hotel == {"hotelId": "par-1"}
    assert 3 <= len(result.offers) <= 5


# ============================================================
# Details
# ============================================================

@pytest.mark.anyio
async def test_get_hotel_details(make_hotel_service):
    service, fake = make_hotel_service({BY_HOTELS_PATH: (200, {"data": [
        {"hotelId": "HLPAR002", "name": "Hotel Lumiere", "address": {"cityName": "PARIS", "countryCode": "FR"}}
    ]})})
    hotel = await service.get_hotel_details("HLPAR002")

    assert hotel.name == "Hotel Lumiere"
    assert hotel.model_dump(by_alias=True)["formattedAddress"] == "PARIS, FR"
    assert fake.calls_to(BY_HOTELS_PATH)[0].url.params["hotelIds"] == "HLPAR002"


@pytest.mark.anyio
async def test_get_hotel_details_not_found(make_hotel_service):
    service, _ = make_hotel_service({BY_HOTELS_PATH: (200, {"data": []})})
    with pytest.raises(HotelNotFoundError):
        await service.get_hotel_details("HLPAR404")


@pytest.mark.anyio
async def test_get_hotel_details_upstream_error_is_not_found(make_hotel_service):
    service, _ = make_hotel_service({BY_HOTELS_PATH: (400, {"errors": [{"detail": "INVALID PROPERTY CODE"}]})})
    with pytest.raises(HotelNotFoundError) as exc_info:
        await service.get_hotel_details("BOGUS")
    assert "INVALID PROPERTY CODE" in exc_info.value.message


@pytest.mark.anyio
async def test_get_hotel_details_for_fallback_id(make_hotel_service):
    service, fake = make_hotel_service()
    hotel = await service.get_hotel_details("par-2")

    assert hotel.hotel_id == "par-2"
    assert hotel.source == DataSource.FALLBACK
    assert fake.requests == []


# ============================================================
# Availability
# ============================================================

@pytest.mark.anyio
async def test_check_availability_uses_first_hotel(make_hotel_service):
    service, fake = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": [hotel_offer_item("HLPAR001")]}),
    })
    result = await service.check_availability("PAR", "2026-11-10", "2026-11-12", travelers=3)

    assert result.offers[0].offer_id == "OFFER-HLPAR001"
    assert fake.calls_to(BY_CITY_PATH)[0].url.params["amenities"] == "ROOM_SERVICE"
    params = fake.calls_to(HOTEL_OFFERS_PATH)[0].url.params
    assert params["hotelIds"] == "HLPAR001"
    assert params["bestRateOnly"] == "true"
    assert params["adults"] == "3"


@pytest.mark.anyio
async def test_check_availability_no_hotels(make_hotel_service):
    service, _ = make_hotel_service({BY_CITY_PATH: (200, {"data": []})})
    with pytest.raises(HotelNotFoundError):
        await service.check_availability("PAR", "2026-11-10", "2026-11-12")


@pytest.mark.anyio
async def test_check_availability_no_offers(make_hotel_service):
    service, _ = make_hotel_service({
        BY_CITY_PATH: (200, CITY_HOTELS),
        HOTEL_OFFERS_PATH: (200, {"data": []}),
    })
    assert await service.check_availability("PAR", "2026-11-10", "2026-11-12") is None


@pytest.mark.anyio
async def test_fallback_details_match_search_listing(make_hotel_service):
    service, _ = make_hotel_service({TOKEN_PATH: (401, {"error": "invalid_client"})})
    listing = await service.search_hotels("PAR", "2026-11-10", "2026-11-12")
    details = await service.get_hotel_details("par-0")

    listed = listing.data[0]
    assert details.hotel_id == listed.hotel_id
    assert details.price == listed.price
    assert details.rating == listed.rating
    dumped = details.model_dump(by_alias=True)
    assert dumped["formattedAddress"] == "Paris, France"
    assert dumped["description"] == "No description available"


@pytest.mark.anyio
async def test_fallback_details_beyond_listing_not_found(make_hotel_service):
    service, _ = make_hotel_service({BY_HOTELS_PATH: (200, {"data": []})})
    with pytest.raises(HotelNotFoundError):
        await service.get_hotel_details("par-8")


@pytest.mark.anyio
async def test_get_hotel_details_auth_error_is_not_found(make_hotel_service, settings):
    unconfigured = settings.model_copy(update={"amadeus_api_key": ""})
    service, _ = make_hotel_service(custom_settings=unconfigured)
    with pytest.raises(HotelNotFoundError) as exc_info:
        await service.get_hotel_details("HLPAR002")
    assert "Missing Amadeus API credentials" in exc_info.value.message
