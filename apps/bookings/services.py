"""Domain services for the booking core.

Every read and write path below filters reservations with ``overlap_q``,
the query form of the half-open predicate ``TimeRange.overlaps_with``.
``book_room`` is the only way reservations get created: it serializes
bookings per room with an in-process keyed lock plus a row lock on the
room, and re-checks conflicts inside the same transaction that
inserts the reservation.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from django.conf import settings  # type: ignore
from django.db import DatabaseError, IntegrityError, OperationalError, transaction  # type: ignore
from django.db.models import Exists, OuterRef, Q, QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.rooms.models import Room
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import TimeRange
from shared.infrastructure.locks import KeyedLock, LockTimeout

from .domain.events import ReservationBooked, ReservationCancelled
from .exceptions import (
    BookingBusyError,
    BookingConflictError,
    BookingError,
    InvalidBookingRequestError,
    InvalidIntervalError,
    PersistenceError,
    RoomNotFoundError,
)
from .models import Reservation

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0

# lock_not_available, serialization_failure, deadlock_detected
_RETRYABLE_SQLSTATES = {"55P03", "40001", "40P01"}

_room_locks = KeyedLock()


# ===== Overlap oracle =====

def ensure_valid_interval(start: Optional[datetime], end: Optional[datetime]) -> TimeRange:
    """Return the interval as a TimeRange or raise InvalidIntervalError."""

    if start is None or end is None:
        raise InvalidIntervalError("Start time and end time are required.")
    try:
        return TimeRange(start, end)
    except ValueError as exc:
        raise InvalidIntervalError() from exc
    except TypeError as exc:
        # naive compared with aware
        raise InvalidIntervalError("Start time and end time must use the same timezone awareness.") from exc


def overlap_q(start: datetime, end: datetime, prefix: str = "") -> Q:
    """Reservations intersecting [start, end): start_time < end AND end_time > start."""

    return Q(**{f"{prefix}start_time__lt": end, f"{prefix}end_time__gt": start})


def _conflicting_reservations(room_id: int, period: TimeRange, exclude_reservation_id=None) -> QuerySet:
    qs = Reservation.objects.filter(room_id=room_id).filter(overlap_q(period.start, period.end))
    if exclude_reservation_id is not None:
        qs = qs.exclude(pk=exclude_reservation_id)
    return qs


def has_conflict(
    room_id: int,
    start: datetime,
    end: datetime,
    *,
    exclude_reservation_id: Optional[int] = None,
) -> bool:
    """Whether any reservation of the room overlaps [start, end)."""

    period = ensure_valid_interval(start, end)
    return _conflicting_reservations(room_id, period, exclude_reservation_id).exists()


def _rooms_without_conflict_queryset(tenant_id: int, period: TimeRange) -> QuerySet:
    conflicts = Reservation.objects.filter(room=OuterRef("pk")).filter(overlap_q(period.start, period.end))
    return Room.objects.filter(tenant_id=tenant_id).filter(~Exists(conflicts))


def rooms_without_conflict(tenant_id: int, start: datetime, end: datetime) -> set[int]:
    """Ids of the tenant's rooms with no reservation overlapping [start, end)."""

    period = ensure_valid_interval(start, end)
    return set(_rooms_without_conflict_queryset(tenant_id, period).values_list("pk", flat=True))


# ===== Availability enumeration =====

def available_rooms(tenant_id: int, start: datetime, end: datetime) -> list[Room]:
    """Rooms of the tenant that are free for the whole window, ordered by name."""

    period = ensure_valid_interval(start, end)
    rooms = list(_rooms_without_conflict_queryset(tenant_id, period).order_by("name", "id"))
    logger.debug(f"Tenant {tenant_id}: {len(rooms)} rooms free for {period}")
    return rooms


# ===== Booking query =====

def list_bookings(
    tenant_id: int,
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    room_id: Optional[int] = None,
) -> QuerySet:
    """Reservations of the tenant, optionally narrowed to a window and a room.

    A missing bound leaves that side of the window open.
    """

    qs = Reservation.objects.filter(tenant_id=tenant_id).select_related("room")
    if start is not None and end is not None:
        period = ensure_valid_interval(start, end)
        qs = qs.filter(overlap_q(period.start, period.end))
    elif start is not None:
        qs = qs.filter(end_time__gt=start)
    elif end is not None:
        qs = qs.filter(start_time__lt=end)

    if room_id is not None:
        qs = qs.filter(room_id=room_id)

    return qs.order_by("start_time", "id")


# ===== Atomic booking transaction =====

def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _apply_db_lock_timeout(connection, timeout: float) -> None:
    """Bound row-lock waits for the current transaction where the backend supports it."""

    if connection.vendor != "postgresql":
        return
    with connection.cursor() as cursor:
        cursor.execute("SELECT set_config('lock_timeout', %s, true)", [f"{int(timeout * 1000)}ms"])


def _is_retryable(exc: DatabaseError) -> bool:
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    # SQLite reports contention as "database is locked" / "database table is locked"
    return "locked" in str(exc).lower()


def _coerce_id(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise RoomNotFoundError()


def _lock_timeout() -> float:
    return float(getattr(settings, "ROOM_BOOKING_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT))


def book_room(room_id, tenant_id, title: str, start: datetime, end: datetime) -> Reservation:
    """Reserve the room for [start, end) or raise a BookingError.

    The conflict check and the insert run as one unit per room: a keyed
    in-process lock serializes callers in this process, and the room row is
    locked with SELECT ... FOR UPDATE for callers in other processes.
    """

    period = ensure_valid_interval(start, end)
    title = (title or "").strip()
    if not title:
        raise InvalidBookingRequestError("Title is required.")
    room_id = _coerce_id(room_id)
    tenant_id = _coerce_id(tenant_id)
    timeout = _lock_timeout()

    try:
        with _room_locks.acquire(room_id, timeout=timeout):
            reservation = _commit_reservation(room_id, tenant_id, title, period, timeout)
    except LockTimeout as exc:
        logger.warning(f"Room {room_id} lock not acquired within {timeout}s")
        raise BookingBusyError() from exc

    logger.info(
        f"Booked room {room_id} for tenant {tenant_id}: reservation {reservation.pk} {period}"
    )
    return reservation


def _commit_reservation(room_id: int, tenant_id: int, title: str, period: TimeRange, timeout: float) -> Reservation:
    try:
        with DjangoUnitOfWork() as uow:
            _apply_db_lock_timeout(uow.connection, timeout)

            try:
                room = _lock_queryset_if_possible(
                    Room.objects.filter(pk=room_id, tenant_id=tenant_id)
                ).get()
            except Room.DoesNotExist:
                logger.info(f"Room {room_id} not found for tenant {tenant_id}")
                raise RoomNotFoundError()

            if _conflicting_reservations(room.pk, period).exists():
                logger.info(f"Room {room_id} already booked within {period}")
                raise BookingConflictError()

            reservation = Reservation.objects.create(
                room=room,
                tenant_id=room.tenant_id,
                title=title,
                start_time=period.start,
                end_time=period.end,
            )
            uow.record(
                ReservationBooked(
                    aggregate_id=reservation.pk,
                    room_id=room.pk,
                    tenant_id=room.tenant_id,
                    title=title,
                    period=period,
                )
            )
    except BookingError:
        raise
    except IntegrityError as exc:
        # Raised by the PostgreSQL exclusion constraint when a racing writer slipped through
        logger.warning(f"Overlap rejected by database for room {room_id}: {exc}")
        raise BookingConflictError() from exc
    except DatabaseError as exc:
        if isinstance(exc, OperationalError) and _is_retryable(exc):
            logger.warning(f"Lock contention while booking room {room_id}: {exc}")
            raise BookingBusyError() from exc
        logger.error(f"Failed to persist booking for room {room_id}: {exc}", exc_info=True)
        raise PersistenceError() from exc

    return reservation


# ===== Administrative maintenance =====

def update_reservation(
    reservation: Reservation,
    *,
    title: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Reservation:
    """Administrative override: change title or times without a conflict check.

    The interval must still be valid; on PostgreSQL the exclusion constraint
    keeps rejecting overlaps.
    """

    new_start = start if start is not None else reservation.start_time
    new_end = end if end is not None else reservation.end_time
    period = ensure_valid_interval(new_start, new_end)
    if title is not None:
        title = title.strip()
        if not title:
            raise InvalidBookingRequestError("Title is required.")
        reservation.title = title
    reservation.start_time = period.start
    reservation.end_time = period.end

    try:
        with transaction.atomic():
            reservation.save(update_fields=["title", "start_time", "end_time", "updated_at"])
    except IntegrityError as exc:
        logger.warning(f"Update of reservation {reservation.pk} rejected by database: {exc}")
        raise BookingConflictError() from exc
    except DatabaseError as exc:
        logger.error(f"Failed to update reservation {reservation.pk}: {exc}", exc_info=True)
        raise PersistenceError() from exc

    logger.info(f"Reservation {reservation.pk} updated to {period}")
    return reservation


def cancel_reservation(reservation: Reservation) -> None:
    """Delete a reservation and publish ReservationCancelled after commit."""

    reservation_id = reservation.pk
    try:
        with DjangoUnitOfWork() as uow:
            reservation.delete()
            uow.record(
                ReservationCancelled(
                    aggregate_id=reservation_id,
                    room_id=reservation.room_id,
                    tenant_id=reservation.tenant_id,
                )
            )
    except DatabaseError as exc:
        logger.error(f"Failed to delete reservation {reservation_id}: {exc}", exc_info=True)
        raise PersistenceError() from exc

    logger.info(f"Reservation {reservation_id} cancelled")
