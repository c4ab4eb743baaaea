"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent
from shared.domain.value_objects import TimeRange


@dataclass(kw_only=True)
class ReservationBooked(DomainEvent):
    """
    Event: A room was booked through the booking transaction

    aggregate_id is the reservation id.
    """
    room_id: int
    tenant_id: int
    title: str
    period: TimeRange

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'room_id': self.room_id,
            'tenant_id': self.tenant_id,
            'title': self.title,
            'start_time': self.period.start.isoformat(),
            'end_time': self.period.end.isoformat(),
        })
        return data


@dataclass(kw_only=True)
class ReservationCancelled(DomainEvent):
    """Event: A reservation was deleted by an administrator"""
    room_id: int
    tenant_id: int

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({'room_id': self.room_id, 'tenant_id': self.tenant_id})
        return data
