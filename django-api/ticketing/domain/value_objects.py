"""Domain primitives that enforce validity at creation time."""

import re
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Self

_DOCUMENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,35}$")

# Namespace for deriving ticket ids from (event, user) pairs.
TICKET_NAMESPACE = uuid.UUID("5d3c1f0e-8a4b-4c2e-9f6a-2b7d1e0c9a83")


@dataclass(frozen=True)
class EventId:
    """Identifier of an Event document."""

    value: str

    def __post_init__(self) -> None:
        if not _DOCUMENT_ID_PATTERN.match(self.value):
            raise ValueError("Invalid event ID format")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TicketId:
    """Identifier of a Registration document, handed to the attendee as a ticket."""

    value: str

    @classmethod
    def for_registration(cls, event_id: EventId, user_id: str) -> Self:
        """Derive the one ticket id a user can hold for an event."""
        return cls(value=uuid.uuid5(TICKET_NAMESPACE, f"{event_id.value}:{user_id}").hex)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def is_reached_by(self, registered_count: int) -> bool:
        return registered_count >= self.value
