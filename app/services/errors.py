"""
JetSet Backend - Service exceptions
"""

from typing import Optional


class TravelServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AmadeusAuthError(TravelServiceError):
    """Credentials missing or rejected by the Amadeus token endpoint."""

    status_code = 502


class AmadeusAPIError(TravelServiceError):
    """Non-2xx response (or transport failure) from an Amadeus endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code or 502
        self.detail = detail


class InvalidDateError(TravelServiceError):
    status_code = 400


class HotelNotFoundError(TravelServiceError):
    status_code = 404


class PaymentError(TravelServiceError):
    status_code = 400


class PaymentNotFoundError(PaymentError):
    status_code = 404
