"""
JetSet Backend - Booking Service
Hotel bookings and flight orders are confirmed locally with random
references; nothing is sent to a reservation API or persisted.
"""

import logging
import random
import string
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.models import (
    Booking, ContactDetails, FlightOrder, FlightOrderRequest, GuestInfo, PassengerInfo, PaymentInfo
)
from app.services.errors import TravelServiceError

logger = logging.getLogger(__name__)

_ALPHANUMERIC = string.ascii_uppercase + string.digits

DEFAULT_DATE_OF_BIRTH = "1990-01-01"
DEFAULT_COUNTRY_CODE = "91"
DEFAULT_PHONE = "9999999999"
DEFAULT_EMAIL = "guest@example.com"
DEFAULT_NATIONALITY = "IN"
DEFAULT_PASSPORT_EXPIRY = "2030-01-01"
COMPANY_NAME = "JetSet GO"


class MissingFlightOfferError(TravelServiceError):
    status_code = 400


class BookingService:
    """Fabricates booking confirmations."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _code(self, length: int = 8) -> str:
        return "".join(self.rng.choices(_ALPHANUMERIC, k=length))

    # ============================================================
    # Hotels
    # ============================================================

    def book_hotel(
        self,
        hotel_id: str,
        offer_id: str,
        guests: GuestInfo,
        payments: PaymentInfo,
    ) -> Booking:
        # Card data is never logged
        logger.info(f"Booking hotel {hotel_id} offer {offer_id} for {guests.first_name} {guests.last_name}")

        return Booking(
            bookingId=f"MOCK-{self._code()}",
            confirmationNumber=f"CN{self._code()}",
            hotelId=hotel_id,
            offerId=offer_id,
            checkInDate=guests.check_in_date,
            checkOutDate=guests.check_out_date,
            guestName=f"{guests.first_name} {guests.last_name}",
            totalPrice=payments.amount,
            currency=payments.currency or "USD",
            bookingDate=datetime.now(timezone.utc)
        )

    # ============================================================
    # Flights
    # ============================================================

    def create_flight_order(self, request: FlightOrderRequest) -> FlightOrder:
        """Confirm a flight order built from the request (or taken from ``data``)."""
        body = request.data or {}
        flight_offers = body.get("flightOffers") or ([request.flight_offer] if request.flight_offer else [])
        if not flight_offers or not flight_offers[0]:
            raise MissingFlightOfferError("Missing flight details. Please try searching for flights again.")

        travelers = body.get("travelers") or build_travelers(request.passengers, request.contact_details)
        contacts = body.get("contacts") or [build_contact(request.contact_details, travelers)]

        order = FlightOrder(
            id=uuid.uuid4().hex,
            bookingReference=f"JSG{self._code(7)}",
            pnr=self._code(6),
            createdAt=datetime.now(timezone.utc),
            travelers=travelers,
            flightOffers=flight_offers,
            contacts=contacts,
            ticketingAgreement=body.get("ticketingAgreement") or {"option": "DELAY_TO_CANCEL", "delay": "6D"}
        )
        logger.info(f"Created flight order {order.booking_reference} for {len(travelers)} travelers")
        return order


def _phones(contact: Optional[ContactDetails]) -> List[Dict[str, str]]:
    return [{
        "deviceType": "MOBILE",
        "countryCallingCode": (contact.country_code if contact else None) or DEFAULT_COUNTRY_CODE,
        "number": (contact.phone_number if contact else None) or DEFAULT_PHONE
    }]


def build_travelers(
    passengers: List[PassengerInfo],
    contact: Optional[ContactDetails],
) -> List[Dict[str, Any]]:
    """Amadeus traveler records; a placeholder traveler when none are given."""
    email = (contact.email if contact else None)

    travelers = []
    for index, passenger in enumerate(passengers):
        traveler: Dict[str, Any] = {
            "id": str(index + 1),
            "dateOfBirth": passenger.date_of_birth or DEFAULT_DATE_OF_BIRTH,
            "name": {"firstName": passenger.first_name, "lastName": passenger.last_name},
            "gender": passenger.gender or "MALE",
            "contact": {"emailAddress": email, "phones": _phones(contact)},
            "documents": []
        }
        if passenger.passport_number:
            nationality = passenger.nationality or DEFAULT_NATIONALITY
            traveler["documents"].append({
                "documentType": "PASSPORT",
                "number": passenger.passport_number,
                "expiryDate": passenger.passport_expiry or DEFAULT_PASSPORT_EXPIRY,
                "issuanceCountry": nationality,
                "nationality": nationality,
                "holder": True
            })
        travelers.append(traveler)

    if not travelers:
        logger.warning("Missing passenger data, creating placeholder traveler")
        travelers.append({
            "id": "1",
            "dateOfBirth": DEFAULT_DATE_OF_BIRTH,
            "name": {
                "firstName": (contact.first_name if contact else None) or "Guest",
                "lastName": (contact.last_name if contact else None) or "User"
            },
            "gender": "MALE",
            "contact": {"emailAddress": email or DEFAULT_EMAIL, "phones": _phones(contact)}
        })

    return travelers


def build_contact(contact: Optional[ContactDetails], travelers: List[Dict[str, Any]]) -> Dict[str, Any]:
    first_traveler = travelers[0]["name"] if travelers else {}
    return {
        "addresseeName": {
            "firstName": (contact.first_name if contact else None) or first_traveler.get("firstName") or "Guest",
            "lastName": (contact.last_name if contact else None) or first_traveler.get("lastName") or "User"
        },
        "companyName": COMPANY_NAME,
        "purpose": "STANDARD",
        "phones": _phones(contact),
        "emailAddress": (contact.email if contact else None) or DEFAULT_EMAIL
    }


# Singleton instance
booking_service = BookingService()
