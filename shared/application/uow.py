"""
Unit of Work

One database transaction plus the domain events it produced. Events are
handed to the message bus only once Django reports the commit, so a rolled
back booking never announces itself.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Transaction boundary used by application services"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        pass

    @abstractmethod
    def rollback(self):
        pass

    @abstractmethod
    def record(self, event: DomainEvent):
        """Queue an event for publication after commit"""


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work on top of ``transaction.atomic()``

    Usage:
        with DjangoUnitOfWork() as uow:
            room = Room.objects.select_for_update().get(pk=room_id)
            reservation = Reservation.objects.create(room=room, ...)
            uow.record(ReservationBooked(aggregate_id=reservation.pk, ...))
        # atomic block is closed; events go out on commit

    When nested inside an outer atomic block the events wait for the
    outermost commit, as ``transaction.on_commit`` does.
    """

    def __init__(self, using: Optional[str] = None):
        self.using = using
        self._pending: List[DomainEvent] = []
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            atomic, self._atomic = self._atomic, None
            if atomic is not None:
                atomic.__exit__(exc_type, exc_val, exc_tb)

    @property
    def connection(self):
        return transaction.get_connection(self.using)

    def commit(self):
        events, self._pending = self._pending, []
        logger.debug(f"Unit of work finished with {len(events)} pending events")
        if events:
            transaction.on_commit(lambda: self._publish(events), using=self.using)

    def rollback(self):
        if self._pending:
            logger.warning(f"Transaction rolled back, dropping {len(self._pending)} events")
        self._pending = []

    def record(self, event: DomainEvent):
        self._pending.append(event)
        logger.debug(f"Recorded {event.__class__.__name__} (aggregate ID: {event.aggregate_id})")

    @staticmethod
    def _publish(events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        try:
            message_bus.publish_events(events)
        except Exception as e:
            # The transaction is already committed
            logger.error(f"Error publishing events: {e}", exc_info=True)
