"""Event service - catalog and ticket lookups.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from ticketing.domain import EventId
from ticketing.domain.errors import (
    EventNotFoundError,
    InvalidEventIdError,
    RegistrationValidationError,
)
from ticketing.domain.models import Event, Registration
from ticketing.stores.interfaces import EventStore


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return upcoming events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            EventNotFoundError: If the event does not exist.
        """
        parsed = self._parse_event_id(event_id)
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_registrations_for_event(self, event_id: str) -> list[Registration]:
        """Return attendees of an event.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        return self._store.list_registrations_for_event(event.id)

    def list_registrations_for_user(self, user_id: str | None) -> list[Registration]:
        """Return the tickets a user holds, newest first."""
        if not user_id or not user_id.strip():
            raise RegistrationValidationError("userId required")
        return self._store.list_registrations_for_user(user_id.strip())

    @staticmethod
    def _parse_event_id(event_id: str) -> EventId:
        try:
            return EventId.from_string(event_id)
        except ValueError:
            raise InvalidEventIdError() from None
