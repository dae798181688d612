"""
JetSet Backend - Flight API Routes
Flight search (Amadeus with placeholder fallback) and the flight order stub.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from app.models import ApiResponse, FlightOrderRequest, FlightSearchRequest
from app.routes.common import error_response, request_params
from app.services import get_booking_service, get_flight_service
from app.services.booking_service import BookingService, MissingFlightOfferError
from app.services.flight_service import FlightService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flights", tags=["Flights"])


@router.api_route(
    "/search",
    methods=["GET", "POST"],
    response_model=ApiResponse,
    summary="Search flights",
    description="Flight offers between two airports. Falls back to placeholder offers."
)
async def search_flights(request: Request, service: FlightService = Depends(get_flight_service)):
    """
    - **from** / **to**: IATA airport or city codes
    - **departDate**: outbound date
    - **returnDate**: return date (round trips)
    - **travelers**: adults, 1-9
    - **tripType**: oneWay / roundTrip
    """
    params = await request_params(request)
    try:
        query = FlightSearchRequest.model_validate(params)
    except ValidationError as e:
        logger.warning(f"Invalid flight search parameters: {e}")
        return error_response(400, "Invalid search parameters", error=str(e))

    if not query.origin or not query.destination or not query.depart_date:
        return error_response(400, "Origin (from), destination (to) and departDate are required")

    try:
        result = await service.search_flights(
            query.origin,
            query.destination,
            query.depart_date,
            return_date=query.return_date,
            travelers=query.travelers,
            travel_class=query.travel_class,
            max_results=query.max_results,
        )
    except Exception as e:
        logger.exception(f"Error processing flight search: {e}")
        return ApiResponse(success=True, data=[], message="Error processing search request, please try again")

    return ApiResponse(
        success=True,
        data=result["data"],
        message=None if result["data"] else "No flights found",
        meta={"source": result["source"], "total": len(result["data"])}
    )


@router.post(
    "/booking/flight-orders",
    response_model=ApiResponse,
    summary="Create flight order",
    description="Confirms a flight order locally; nothing is ticketed upstream"
)
async def create_flight_order(
    order: Optional[FlightOrderRequest] = None,
    service: BookingService = Depends(get_booking_service)
):
    try:
        created = service.create_flight_order(order or FlightOrderRequest())
    except MissingFlightOfferError as e:
        return error_response(400, e.message, error=e.message)

    return ApiResponse(success=True, data=created)
