"""
JetSet Backend - Hotel API Routes

Search degrades to generated placeholder hotels and never fails the
request: errors are logged and answered with 200 and empty data so the
client keeps rendering.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError

from app.models import ApiResponse, HotelBookingRequest, HotelSearchRequest
from app.routes.common import error_response, request_params
from app.services import get_booking_service, get_hotel_service
from app.services.booking_service import BookingService
from app.services.errors import HotelNotFoundError, InvalidDateError, TravelServiceError
from app.services.hotel_service import HotelService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hotels", tags=["Hotels"])

DEFAULT_SEARCH_TRAVELERS = 2


def _empty_search(message: str) -> ApiResponse:
    return ApiResponse(success=True, data={"data": []}, message=message)


# Order matters: the catch-all "/{hotel_id}" route is registered last.

@router.get(
    "/destinations",
    response_model=ApiResponse,
    summary="List destinations",
    description="Popular destination cities (cached reference list)"
)
async def get_destinations(service: HotelService = Depends(get_hotel_service)):
    return ApiResponse(success=True, data=service.get_destinations())


@router.get(
    "/list",
    response_model=ApiResponse,
    summary="List hotels in a city",
)
async def list_hotels(
    city_code: Optional[str] = Query(None, alias="cityCode", description="IATA city code, e.g. PAR"),
    service: HotelService = Depends(get_hotel_service)
):
    if not city_code:
        return error_response(400, "City code is required")

    try:
        hotels = await service.list_hotels(city_code)
    except TravelServiceError as e:
        logger.error(f"Error listing hotels for {city_code}: {e}")
        return error_response(e.status_code if e.status_code >= 400 else 500, "Error listing hotels", error=e.message)

    return ApiResponse(success=True, data=hotels)


@router.api_route(
    "/search",
    methods=["GET", "POST"],
    response_model=ApiResponse,
    summary="Search hotels",
    description="Hotels with offers for a destination and stay. Falls back to placeholder hotels."
)
async def search_hotels(request: Request, service: HotelService = Depends(get_hotel_service)):
    """
    Parameters may come from the query string (GET) or JSON body (POST):

    - **destination**: city code
    - **checkInDate** / **checkOutDate**: stay dates
    - **travelers**: number of adults (default 2)
    """
    params = await request_params(request)
    try:
        query = HotelSearchRequest.model_validate(params)
    except ValidationError as e:
        logger.warning(f"Invalid hotel search parameters: {e}")
        return error_response(400, "Invalid search parameters", error=str(e))

    if not query.destination:
        return error_response(400, "Destination is required")
    if not query.check_in_date or not query.check_out_date:
        return error_response(400, "Check-in and check-out dates are required")

    logger.info(
        f"Hotel search request: destination={query.destination} checkIn={query.check_in_date} "
        f"checkOut={query.check_out_date} travelers={query.travelers} method={request.method}"
    )

    try:
        result = await service.search_hotels(
            query.destination,
            query.check_in_date,
            query.check_out_date,
            adults=query.travelers or DEFAULT_SEARCH_TRAVELERS,
        )
    except InvalidDateError as e:
        logger.error(f"Hotel search rejected: {e}")
        return _empty_search("No hotels found for this search")
    except Exception as e:
        logger.exception(f"Error processing hotel search: {e}")
        return _empty_search("Error processing search request, please try again")

    if not result.data:
        return ApiResponse(success=True, data=result, message="No hotels found")
    return ApiResponse(success=True, data=result)


@router.get(
    "/check-availability",
    response_model=ApiResponse,
    summary="Check availability in a city",
    description="Best-rate offers of the first hotel found in the destination"
)
async def check_availability(
    destination: Optional[str] = Query(None),
    check_in_date: Optional[str] = Query(None, alias="checkInDate"),
    check_out_date: Optional[str] = Query(None, alias="checkOutDate"),
    travelers: int = Query(1, ge=1, le=9),
    service: HotelService = Depends(get_hotel_service)
):
    if not destination or not check_in_date or not check_out_date:
        return error_response(
            400,
            "Missing required parameters: destination, checkInDate, and checkOutDate are required"
        )

    try:
        availability = await service.check_availability(destination, check_in_date, check_out_date, travelers)
    except HotelNotFoundError as e:
        return error_response(404, e.message)
    except TravelServiceError as e:
        logger.error(f"Error checking hotel availability: {e}")
        return error_response(e.status_code if e.status_code >= 400 else 500, e.message or "Error checking hotel availability")

    if availability is None:
        return ApiResponse(success=False, message="No availability found for these dates")
    return ApiResponse(success=True, data=availability)


@router.get(
    "/offers/{hotel_id}",
    response_model=ApiResponse,
    summary="Hotel offers",
    description="Priced room offers for one hotel"
)
async def get_hotel_offers(
    hotel_id: str,
    check_in_date: Optional[str] = Query(None, alias="checkInDate"),
    check_out_date: Optional[str] = Query(None, alias="checkOutDate"),
    adults: int = Query(1, ge=1, le=9),
    children: int = Query(0, ge=0, le=9),
    best_rate_only: bool = Query(False, alias="bestRateOnly"),
    service: HotelService = Depends(get_hotel_service)
):
    if not check_in_date or not check_out_date:
        return error_response(400, "Hotel ID, check-in date, and check-out date are required")

    try:
        offers = await service.get_hotel_offers(
            hotel_id, check_in_date, check_out_date,
            adults=adults, children=children, best_rate_only=best_rate_only
        )
    except InvalidDateError as e:
        return error_response(400, "Invalid date format", error=e.message)
    except TravelServiceError as e:
        logger.error(f"Error checking availability for {hotel_id}: {e}")
        return error_response(500, "Error checking hotel availability", error=e.message)

    return ApiResponse(success=True, data=offers)


@router.post(
    "/book/{hotel_id}",
    response_model=ApiResponse,
    summary="Book a hotel",
    description="Returns a locally generated confirmation; nothing is reserved upstream"
)
async def book_hotel(
    hotel_id: str,
    booking: Optional[HotelBookingRequest] = None,
    service: BookingService = Depends(get_booking_service)
):
    booking = booking or HotelBookingRequest()
    if not booking.offer_id or booking.guests is None or booking.payments is None:
        return error_response(400, "Hotel ID, offer ID, guests, and payment information are required")

    confirmation = service.book_hotel(hotel_id, booking.offer_id, booking.guests, booking.payments)
    return ApiResponse(success=True, data=confirmation)


async def _hotel_details(hotel_id: str, service: HotelService):
    try:
        hotel = await service.get_hotel_details(hotel_id)
    except HotelNotFoundError as e:
        logger.warning(f"Hotel details not found for {hotel_id}: {e}")
        return error_response(404, e.message or "Hotel details not found")
    except TravelServiceError as e:
        logger.error(f"Error getting hotel details for {hotel_id}: {e}")
        return error_response(500, "Error getting hotel details", error=e.message)
    return ApiResponse(success=True, data=hotel)


@router.get(
    "/details/{hotel_id}",
    response_model=ApiResponse,
    summary="Hotel details",
)
async def get_hotel_details(hotel_id: str, service: HotelService = Depends(get_hotel_service)):
    return await _hotel_details(hotel_id, service)


@router.get(
    "/{hotel_id}",
    response_model=ApiResponse,
    summary="Hotel details (short path)",
)
async def get_hotel(hotel_id: str, service: HotelService = Depends(get_hotel_service)):
    return await _hotel_details(hotel_id, service)
