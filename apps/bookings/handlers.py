"""Subscribers for booking domain events."""

from __future__ import annotations

import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger("apps.bookings.audit")


def audit_reservation_event(event: DomainEvent) -> None:
    logger.info(f"{event.__class__.__name__}: {event.to_dict()}")
