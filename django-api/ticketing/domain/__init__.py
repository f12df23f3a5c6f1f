from ticketing.domain.models import (
    CounterResult,
    Decision,
    Event,
    EventSummary,
    NotificationResult,
    Registration,
    Ticket,
)
from ticketing.domain.value_objects import Capacity, EventId, Money, TicketId

__all__ = [
    "Event",
    "EventSummary",
    "Registration",
    "Ticket",
    "Decision",
    "CounterResult",
    "NotificationResult",
    "EventId",
    "TicketId",
    "Money",
    "Capacity",
]
