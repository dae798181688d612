"""
JetSet Backend - Payment API Routes
Mock card payment gateway.
"""

import logging

from fastapi import APIRouter, Depends

from app.models import ApiResponse, PaymentInitRequest, PaymentProcessRequest, PaymentRefundRequest
from app.routes.common import error_response
from app.services import get_payment_service
from app.services.errors import PaymentError
from app.services.payment_service import MockPaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.post("/initialize", response_model=ApiResponse, summary="Initialize a payment")
async def initialize_payment(
    request: PaymentInitRequest,
    service: MockPaymentService = Depends(get_payment_service)
):
    return ApiResponse(success=True, data=service.initialize(request))


@router.post("/process", response_model=ApiResponse, summary="Charge a card")
async def process_payment(
    request: PaymentProcessRequest,
    service: MockPaymentService = Depends(get_payment_service)
):
    try:
        payment = service.process(request)
    except PaymentError as e:
        logger.warning(f"Payment processing failed: {e}")
        return error_response(e.status_code, e.message)

    if payment.status.value == "DECLINED":
        return ApiResponse(success=False, data=payment, message="Payment declined")
    return ApiResponse(success=True, data=payment)


@router.get("/verify/{payment_id}", response_model=ApiResponse, summary="Payment status")
async def verify_payment(payment_id: str, service: MockPaymentService = Depends(get_payment_service)):
    try:
        payment = service.verify(payment_id)
    except PaymentError as e:
        return error_response(e.status_code, e.message)
    return ApiResponse(success=True, data=payment)


@router.post("/refund", response_model=ApiResponse, summary="Refund a payment")
async def refund_payment(
    request: PaymentRefundRequest,
    service: MockPaymentService = Depends(get_payment_service)
):
    try:
        payment = service.refund(request)
    except PaymentError as e:
        logger.warning(f"Refund failed: {e}")
        return error_response(e.status_code, e.message)
    return ApiResponse(success=True, data=payment)
