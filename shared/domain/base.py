"""
Domain building blocks

- ValueObject: immutable, compared by value
- DomainEvent: a fact recorded inside a transaction and published after it commits
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """Frozen dataclass base; equality and hashing come from the fields."""


@dataclass(kw_only=True)
class DomainEvent:
    """
    Something that happened to an aggregate

    ``aggregate_id`` is the primary key of the row the event is about.
    Subclasses add their own keyword-only fields and extend ``to_dict``.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: Optional[int] = None

    def to_dict(self) -> dict:
        """JSON-friendly representation used by log handlers"""
        return {
            'event_id': str(self.event_id),
            'event_type': type(self).__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': self.aggregate_id,
        }
