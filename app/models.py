"""
JetSet Backend - Pydantic Models
Data model definitions
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from enum import Enum


# ============================================================
# Enums
# ============================================================

class DataSource(str, Enum):
    """Where a search result came from"""
    AMADEUS = "amadeus"
    FALLBACK = "fallback"


class BookingStatus(str, Enum):
    CONFIRMED = "CONFIRMED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    CAPTURED = "CAPTURED"
    DECLINED = "DECLINED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


# ============================================================
# Envelope
# ============================================================

class ApiResponse(BaseModel):
    """Uniform response envelope: {success, data, message?}"""
    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None


# ============================================================
# Hotel Models
# ============================================================

class Destination(BaseModel):
    """Static reference destination"""
    code: str
    name: str
    country: str


class HotelAddress(BaseModel):
    lines: List[str] = []
    city_name: Optional[str] = Field(default=None, alias="cityName")
    country_code: Optional[str] = Field(default=None, alias="countryCode")
    postal_code: Optional[str] = Field(default=None, alias="postalCode")

    class Config:
        populate_by_name = True
        extra = "allow"


class OfferPrice(BaseModel):
    total: str
    currency: str = "USD"
    base: Optional[str] = None
    taxes: Optional[str] = None

    class Config:
        extra = "allow"


class OfferRoom(BaseModel):
    type: Optional[str] = None
    type_estimated: Optional[Dict[str, Any]] = Field(default=None, alias="typeEstimated")
    description: Optional[Dict[str, Any]] = None
    amenities: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class Offer(BaseModel):
    """A priced, bookable room/rate combination for a given stay"""
    offer_id: str = Field(alias="id")
    check_in_date: Optional[str] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[str] = Field(default=None, alias="checkOutDate")
    price: OfferPrice
    room: OfferRoom = Field(default_factory=OfferRoom)
    policies: Optional[Dict[str, Any]] = None
    board_type: Optional[str] = Field(default=None, alias="boardType")
    cancellable: Optional[bool] = None

    # Display-only fields added by the normalizer
    formatted_price: Optional[str] = Field(default=None, alias="formattedPrice")
    room_description: Optional[str] = Field(default=None, alias="roomDescription")
    cancellation_policy: Optional[str] = Field(default=None, alias="cancellationPolicy")
    bed_type: Optional[str] = Field(default=None, alias="bedType")
    amenities: List[str] = []
    source: DataSource = DataSource.AMADEUS

    class Config:
        populate_by_name = True
        extra = "allow"


class Hotel(BaseModel):
    """Hotel as returned to the client, merged with city metadata"""
    hotel_id: str = Field(alias="hotelId")
    name: str
    city_code: Optional[str] = Field(default=None, alias="cityCode")
    city_name: Optional[str] = Field(default=None, alias="cityName")
    country: Optional[str] = None
    location: Optional[str] = None
    address: Optional[HotelAddress] = None
    rating: Optional[float] = None
    amenities: List[str] = []
    image: Optional[str] = None
    images: List[str] = []
    price: Optional[str] = None
    currency: Optional[str] = None
    formatted_price: Optional[str] = Field(default=None, alias="formattedPrice")
    offers: List[Offer] = []
    source: DataSource = DataSource.AMADEUS

    class Config:
        populate_by_name = True
        extra = "allow"


class HotelSearchRequest(BaseModel):
    """Hotel search parameters (query string or JSON body)"""
    destination: Optional[str] = None
    check_in_date: Optional[str] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[str] = Field(default=None, alias="checkOutDate")
    travelers: Optional[int] = None

    class Config:
        populate_by_name = True


class HotelSearchResult(BaseModel):
    data: List[Hotel] = []
    source: DataSource = DataSource.AMADEUS
    check_in_date: Optional[str] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[str] = Field(default=None, alias="checkOutDate")

    class Config:
        populate_by_name = True


class HotelOffers(BaseModel):
    hotel: Optional[Dict[str, Any]] = None
    offers: List[Offer] = []
    source: DataSource = DataSource.AMADEUS


# ============================================================
# Booking Models
# ============================================================

class GuestInfo(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    check_in_date: Optional[str] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[str] = Field(default=None, alias="checkOutDate")

    class Config:
        populate_by_name = True


class PaymentInfo(BaseModel):
    amount: float
    currency: Optional[str] = None
    method: Optional[str] = None
    payment_id: Optional[str] = Field(default=None, alias="paymentId")

    class Config:
        populate_by_name = True


class HotelBookingRequest(BaseModel):
    offer_id: Optional[str] = Field(default=None, alias="offerId")
    guests: Optional[GuestInfo] = None
    payments: Optional[PaymentInfo] = None

    class Config:
        populate_by_name = True


class Booking(BaseModel):
    """In-memory booking confirmation; never persisted"""
    booking_id: str = Field(alias="bookingId")
    confirmation_number: str = Field(alias="confirmationNumber")
    status: BookingStatus = BookingStatus.CONFIRMED
    hotel_id: str = Field(alias="hotelId")
    offer_id: str = Field(alias="offerId")
    check_in_date: Optional[str] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[str] = Field(default=None, alias="checkOutDate")
    guest_name: str = Field(alias="guestName")
    total_price: float = Field(alias="totalPrice")
    currency: str = "USD"
    booking_date: datetime = Field(alias="bookingDate")

    class Config:
        populate_by_name = True


# ============================================================
# Flight Models
# ============================================================

class FlightSearchRequest(BaseModel):
    origin: Optional[str] = Field(default=None, alias="from")
    destination: Optional[str] = Field(default=None, alias="to")
    depart_date: Optional[str] = Field(default=None, alias="departDate")
    return_date: Optional[str] = Field(default=None, alias="returnDate")
    travelers: int = Field(default=1, ge=1, le=9)
    trip_type: str = Field(default="oneWay", alias="tripType")
    travel_class: Optional[str] = Field(default=None, alias="travelClass")
    max_results: Optional[int] = Field(default=None, ge=1, le=250, alias="max")

    class Config:
        populate_by_name = True


class PassengerInfo(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth")
    gender: Optional[str] = None
    passport_number: Optional[str] = Field(default=None, alias="passportNumber")
    passport_expiry: Optional[str] = Field(default=None, alias="passportExpiry")
    nationality: Optional[str] = None

    class Config:
        populate_by_name = True


class ContactDetails(BaseModel):
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias="countryCode")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")

    class Config:
        populate_by_name = True


class FlightOrderRequest(BaseModel):
    """
    Either a pre-built Amadeus flight-order body under ``data`` or the
    flight offer plus passenger/contact details to build one from.
    """
    data: Optional[Dict[str, Any]] = None
    flight_offer: Optional[Dict[str, Any]] = Field(default=None, alias="flightOffer")
    passengers: List[PassengerInfo] = Field(default=[], alias="passengerData")
    contact_details: Optional[ContactDetails] = Field(default=None, alias="contactDetails")

    class Config:
        populate_by_name = True


class FlightOrder(BaseModel):
    id: str
    booking_reference: str = Field(alias="bookingReference")
    pnr: str
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime = Field(alias="createdAt")
    travelers: List[Dict[str, Any]]
    flight_offers: List[Dict[str, Any]] = Field(alias="flightOffers")
    contacts: List[Dict[str, Any]] = []
    ticketing_agreement: Dict[str, Any] = Field(default={}, alias="ticketingAgreement")

    class Config:
        populate_by_name = True


# ============================================================
# Payment Models
# ============================================================

class CardDetails(BaseModel):
    number: str
    expiry: Optional[str] = None
    cvv: Optional[str] = None
    holder_name: Optional[str] = Field(default=None, alias="holderName")

    class Config:
        populate_by_name = True


class PaymentInitRequest(BaseModel):
    amount: float = Field(gt=0)
    currency: str = "USD"
    order_id: Optional[str] = Field(default=None, alias="orderId")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    payment_method: str = Field(default="CREDIT_CARD", alias="paymentMethod")

    class Config:
        populate_by_name = True


class PaymentProcessRequest(BaseModel):
    payment_id: str = Field(alias="paymentId")
    card_details: CardDetails = Field(alias="cardDetails")

    class Config:
        populate_by_name = True


class PaymentRefundRequest(BaseModel):
    payment_id: str = Field(alias="paymentId")
    amount: Optional[float] = Field(default=None, gt=0)

    class Config:
        populate_by_name = True


class Payment(BaseModel):
    payment_id: str = Field(alias="paymentId")
    order_id: Optional[str] = Field(default=None, alias="orderId")
    amount: float
    currency: str
    status: PaymentStatus
    payment_method: str = Field(alias="paymentMethod")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    card_last4: Optional[str] = Field(default=None, alias="cardLast4")
    refunded_amount: float = Field(default=0.0, alias="refundedAmount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True
