"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Documents are mapped to and from them in ticketing/stores/event_store.py.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ticketing.domain.value_objects import Capacity, EventId, Money, TicketId


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    description: str
    date: str
    time: str
    venue: str
    location: str
    category: str
    price: Money
    discount_price: Money | None
    capacity: Capacity | None
    registered_count: int
    organizer_name: str
    image_url: str | None = None

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and self.capacity.is_reached_by(
            self.registered_count
        )

    @property
    def effective_price(self) -> Money:
        return self.discount_price if self.discount_price is not None else self.price


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration (one attendee ticket)."""

    id: TicketId
    event_id: EventId
    user_id: str
    user_name: str
    user_email: str
    registered_at: datetime


@dataclass(frozen=True)
class EventSummary:
    """Event details quoted in a confirmation message."""

    title: str
    date: str
    time: str
    venue: str
    location: str
    organizer_name: str
    price: Money

    @classmethod
    def of(cls, event: Event) -> "EventSummary":
        return cls(
            title=event.title,
            date=event.date,
            time=event.time,
            venue=event.venue,
            location=event.location,
            organizer_name=event.organizer_name,
            price=event.effective_price,
        )


class Decision(Enum):
    """Outcome of an admission check."""

    ADMIT = "ADMIT"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    EVENT_FULL = "EVENT_FULL"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"


class CounterResult(Enum):
    OK = "ok"
    WARNING = "warning"


class NotificationResult(Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class Ticket:
    """Result of a successful registration."""

    ticket_id: TicketId
    event_id: EventId
    user_id: str
    registered_at: datetime
    counter: CounterResult
    notification: NotificationResult
