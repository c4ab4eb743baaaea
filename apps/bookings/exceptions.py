"""Error taxonomy of the booking core.

Every error carries a stable ``code`` that API clients can rely on and a
human readable message. None of them is retried by the core; ``busy`` and
``persistence_failure`` are safe for the caller to retry because a failed
booking never leaves partial state behind.
"""

from __future__ import annotations


class BookingError(Exception):
    """Base class for booking failures."""

    code = "booking_error"
    default_message = "Booking failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIntervalError(BookingError):
    """Raised when start is not strictly before end."""

    code = "invalid_interval"
    default_message = "Start time must be before end time."


class RoomNotFoundError(BookingError):
    """Raised when the room does not exist under the requesting tenant."""

    code = "room_not_found"
    default_message = "Room not found or does not belong to tenant."


class BookingConflictError(BookingError):
    """Raised when a room is already booked for an overlapping period."""

    code = "booking_conflict"
    default_message = "Room is already booked for this time period."


class BookingBusyError(BookingError):
    """Raised when the room could not be locked within the timeout."""

    code = "busy"
    default_message = "Room is busy processing another booking, please retry."


class PersistenceError(BookingError):
    """Raised when storage could not durably commit the booking."""

    code = "persistence_failure"
    default_message = "The booking could not be stored, please retry."


class InvalidBookingRequestError(BookingError):
    """Raised when a required booking field is missing or blank."""

    code = "invalid_request"
    default_message = "Title, start time, and end time are required."
