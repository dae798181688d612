"""
JetSet Backend - Mock Payment Service
In-memory stand-in for the card payment gateway. Payments live only as
long as the process.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict

from app.models import (
    Payment, PaymentInitRequest, PaymentProcessRequest, PaymentRefundRequest, PaymentStatus
)
from app.services.errors import PaymentError, PaymentNotFoundError

logger = logging.getLogger(__name__)

# Test cards ending in this suffix are declined
DECLINE_SUFFIX = "0000"


class MockPaymentService:
    """initialize -> process -> verify / refund"""

    def __init__(self):
        self._payments: Dict[str, Payment] = {}

    def initialize(self, request: PaymentInitRequest) -> Payment:
        now = datetime.now(timezone.utc)
        payment = Payment(
            paymentId=f"PAY-{uuid.uuid4().hex[:12].upper()}",
            orderId=request.order_id,
            amount=round(request.amount, 2),
            currency=request.currency,
            status=PaymentStatus.PENDING,
            paymentMethod=request.payment_method,
            customerEmail=request.customer_email,
            createdAt=now,
            updatedAt=now
        )
        self._payments[payment.payment_id] = payment
        logger.info(f"Initialized payment {payment.payment_id} for {payment.amount} {payment.currency}")
        return payment

    def _get(self, payment_id: str) -> Payment:
        payment = self._payments.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(f"Payment {payment_id} not found")
        return payment

    def process(self, request: PaymentProcessRequest) -> Payment:
        payment = self._get(request.payment_id)
        if payment.status != PaymentStatus.PENDING:
            raise PaymentError(f"Payment {payment.payment_id} is already {payment.status.value}")

        number = "".join(ch for ch in request.card_details.number if ch.isdigit())
        if len(number) < 12:
            raise PaymentError("Invalid card number")

        payment.card_last4 = number[-4:]
        payment.status = PaymentStatus.DECLINED if number.endswith(DECLINE_SUFFIX) else PaymentStatus.CAPTURED
        payment.updated_at = datetime.now(timezone.utc)

        logger.info(f"Processed payment {payment.payment_id}: {payment.status.value}")
        return payment

    def verify(self, payment_id: str) -> Payment:
        return self._get(payment_id)

    def refund(self, request: PaymentRefundRequest) -> Payment:
        payment = self._get(request.payment_id)
        if payment.status not in (PaymentStatus.CAPTURED, PaymentStatus.PARTIALLY_REFUNDED):
            raise PaymentError(f"Payment {payment.payment_id} cannot be refunded in status {payment.status.value}")

        refundable = round(payment.amount - payment.refunded_amount, 2)
        amount = refundable if request.amount is None else round(request.amount, 2)
        if amount > refundable:
            raise PaymentError(f"Refund amount {amount} exceeds refundable balance {refundable}")

        payment.refunded_amount = round(payment.refunded_amount + amount, 2)
        payment.status = (
            PaymentStatus.REFUNDED if payment.refunded_amount >= payment.amount
            else PaymentStatus.PARTIALLY_REFUNDED
        )
        payment.updated_at = datetime.now(timezone.utc)

        logger.info(f"Refunded {amount} on payment {payment.payment_id}")
        return payment


# Singleton instance
payment_service = MockPaymentService()
