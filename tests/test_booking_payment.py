"""
JetSet Backend Tests
Booking stub and mock payment gateway
"""

import random
import re

import pytest

from app.models import (
    FlightOrderRequest, GuestInfo, PaymentInfo, PaymentInitRequest,
    PaymentProcessRequest, PaymentRefundRequest, PaymentStatus
)
from app.services.booking_service import BookingService, MissingFlightOfferError
from app.services.errors import PaymentError, PaymentNotFoundError
from app.services.payment_service import MockPaymentService


@pytest.fixture
def booking():
    return BookingService(random.Random(3))


@pytest.fixture
def payments():
    return MockPaymentService()


# ============================================================
# Hotel booking
# ============================================================

def test_book_hotel(booking):
    guests = GuestInfo(firstName="Asha", lastName="Rao", checkInDate="2026-11-10", checkOutDate="2026-11-12")
    confirmation = booking.book_hotel("HLPAR002", "OFFER-1", guests, PaymentInfo(amount=420.5))

    assert re.fullmatch(r"MOCK-[A-Z0-9]{8}", confirmation.booking_id)
    assert re.fullmatch(r"CN[A-Z0-9]{8}", confirmation.confirmation_number)
    assert confirmation.status.value == "CONFIRMED"
    assert confirmation.guest_name == "Asha Rao"
    assert confirmation.total_price == 420.5
    assert confirmation.currency == "USD"
    assert confirmation.check_in_date == "2026-11-10"


def test_book_hotel_keeps_payment_currency(booking):
    guests = GuestInfo(firstName="Asha", lastName="Rao")
    confirmation = booking.book_hotel("HLPAR002", "OFFER-1", guests, PaymentInfo(amount=100, currency="EUR"))
    assert confirmation.currency == "EUR"


# ============================================================
# Flight orders
# ============================================================

def test_flight_order_requires_offer(booking):
    with pytest.raises(MissingFlightOfferError):
        booking.create_flight_order(FlightOrderRequest())
    with pytest.raises(MissingFlightOfferError):
        booking.create_flight_order(FlightOrderRequest(data={"flightOffers": []}))


def test_flight_order_from_passengers(booking):
    request = FlightOrderRequest.model_validate({
        "flightOffer": {"id": "1", "price": {"total": "96.40"}},
        "passengerData": [
            {"firstName": "Asha", "lastName": "Rao", "passportNumber": "Z1234567", "nationality": "IN"},
            {"firstName": "Vik", "lastName": "Rao", "gender": "MALE"},
        ],
        "contactDetails": {"email": "asha@example.com", "countryCode": "44", "phoneNumber": "7700900123"},
    })
    order = booking.create_flight_order(request)

    assert re.fullmatch(r"JSG[A-Z0-9]{7}", order.booking_reference)
    assert re.fullmatch(r"[A-Z0-9]{6}", order.pnr)
    assert order.flight_offers == [{"id": "1", "price": {"total": "96.40"}}]
    assert [t["id"] for t in order.travelers] == ["1", "2"]
    assert order.travelers[0]["documents"][0]["number"] == "Z1234567"
    assert order.travelers[0]["documents"][0]["expiryDate"] == "2030-01-01"
    assert order.travelers[1]["documents"] == []
    assert order.travelers[0]["contact"]["phones"][0]["countryCallingCode"] == "44"
    assert order.contacts[0]["companyName"] == "JetSet GO"
    assert order.contacts[0]["addresseeName"] == {"firstName": "Asha", "lastName": "Rao"}
    assert order.ticketing_agreement == {"option": "DELAY_TO_CANCEL", "delay": "6D"}


def test_flight_order_placeholder_traveler(booking):
    order = booking.create_flight_order(FlightOrderRequest(flightOffer={"id": "1"}))

    traveler = order.travelers[0]
    assert traveler["name"] == {"firstName": "Guest", "lastName": "User"}
    assert traveler["dateOfBirth"] == "1990-01-01"
    assert traveler["contact"]["emailAddress"] == "guest@example.com"
    assert traveler["contact"]["phones"][0]["number"] == "9999999999"
    assert order.contacts[0]["emailAddress"] == "guest@example.com"


def test_flight_order_from_prebuilt_body(booking):
    body = {
        "flightOffers": [{"id": "7"}],
        "travelers": [{"id": "1", "name": {"firstName": "Ravi", "lastName": "K"}}],
        "ticketingAgreement": {"option": "CONFIRM"},
    }
    order = booking.create_flight_order(FlightOrderRequest(data=body))

    assert order.flight_offers == [{"id": "7"}]
    assert order.travelers == body["travelers"]
    assert order.ticketing_agreement == {"option": "CONFIRM"}
    assert order.contacts[0]["addresseeName"] == {"firstName": "Ravi", "lastName": "K"}


# ============================================================
# Payments
# ============================================================

def _pending(payments, amount=250.0):
    return payments.initialize(PaymentInitRequest(amount=amount, currency="USD", orderId="MOCK-1"))


def test_payment_lifecycle(payments):
    payment = _pending(payments)
    assert payment.payment_id.startswith("PAY-")
    assert payment.status == PaymentStatus.PENDING

    processed = payments.process(PaymentProcessRequest(
        paymentId=payment.payment_id,
        cardDetails={"number": "4111 1111 1111 1111", "expiry": "12/29", "cvv": "123"}
    ))
    assert processed.status == PaymentStatus.CAPTURED
    assert processed.card_last4 == "1111"
    assert payments.verify(payment.payment_id).status == PaymentStatus.CAPTURED


def test_payment_declined_card(payments):
    payment = _pending(payments)
    processed = payments.process(PaymentProcessRequest(
        paymentId=payment.payment_id, cardDetails={"number": "4000000000000000"}
    ))
    assert processed.status == PaymentStatus.DECLINED


def test_payment_cannot_be_processed_twice(payments):
    payment = _pending(payments)
    request = PaymentProcessRequest(paymentId=payment.payment_id, cardDetails={"number": "4111111111111111"})
    payments.process(request)
    with pytest.raises(PaymentError):
        payments.process(request)


def test_payment_invalid_card_number(payments):
    payment = _pending(payments)
    with pytest.raises(PaymentError):
        payments.process(PaymentProcessRequest(paymentId=payment.payment_id, cardDetails={"number": "4111"}))


def test_verify_unknown_payment(payments):
    with pytest.raises(PaymentNotFoundError) as exc_info:
        payments.verify("PAY-NOPE")
    assert exc_info.value.status_code == 404


def test_partial_then_full_refund(payments):
    payment = _pending(payments, amount=100.0)
    payments.process(PaymentProcessRequest(paymentId=payment.payment_id, cardDetails={"number": "4111111111111111"}))

    partial = payments.refund(PaymentRefundRequest(paymentId=payment.payment_id, amount=40))
    assert partial.status == PaymentStatus.PARTIALLY_REFUNDED
    assert partial.refunded_amount == 40.0

    with pytest.raises(PaymentError):
        payments.refund(PaymentRefundRequest(paymentId=payment.payment_id, amount=70))

    full = payments.refund(PaymentRefundRequest(paymentId=payment.payment_id))
    assert full.status == PaymentStatus.REFUNDED
    assert full.refunded_amount == 100.0


def test_refund_requires_captured_payment(payments):
    payment = _pending(payments)
    with pytest.raises(PaymentError):
        payments.refund(PaymentRefundRequest(paymentId=payment.payment_id))
