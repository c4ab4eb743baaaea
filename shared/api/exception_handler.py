"""DRF exception handler translating booking errors into API responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from apps.bookings.exceptions import (
    BookingConflictError,
    BookingError,
    InvalidBookingRequestError,
    InvalidIntervalError,
    RoomNotFoundError,
)

logger = logging.getLogger(__name__)

# Conflicts answer 400 rather than 409 to keep the established API contract.
STATUS_BY_ERROR = {
    RoomNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidIntervalError: status.HTTP_400_BAD_REQUEST,
    InvalidBookingRequestError: status.HTTP_400_BAD_REQUEST,
    BookingConflictError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: BookingError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def exception_handler(exc, context):  # type: ignore
    if isinstance(exc, BookingError):
        status_code = status_for(exc)
        if status_code >= 500:
            view = context.get("view")
            logger.warning(f"{exc.code} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}")
        return Response({"detail": exc.message, "code": exc.code}, status=status_code)
    return drf_exception_handler(exc, context)
