"""Registration service - orchestrates one registration request.

Order of operations:
1. Validate input (no store access on failure)
2. Admission check via the guard
3. Persist the registration (the commit point)
4. Increment the event's count, best effort
5. Send the confirmation, best effort

Anything failing before step 3 aborts the request. Failures after it are
logged by the collaborator and never turn a committed registration into an
error.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from ticketing.domain import (
    Decision,
    EventId,
    EventSummary,
    NotificationResult,
    Registration,
    Ticket,
    TicketId,
)
from ticketing.domain.errors import (
    AlreadyRegisteredError,
    DomainError,
    EventFullError,
    EventNotFoundError,
    InternalError,
    RegistrationValidationError,
)
from ticketing.services.counter import CapacityCounter
from ticketing.services.guard import RegistrationGuard
from ticketing.services.notifier import Notifier
from ticketing.stores.interfaces import EventStore, RegistrationConflictError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("event_id", "user_id", "user_name", "user_email")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistrationService:
    """Registers users for events."""

    def __init__(
        self,
        store: EventStore,
        notifier: Notifier,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._guard = RegistrationGuard(store)
        self._counter = CapacityCounter(store)
        self._notifier = notifier
        self._clock = clock

    def register(
        self, event_id: str, user_id: str, user_name: str, user_email: str
    ) -> Ticket:
        """Register a user for an event and return their ticket.

        Raises:
            RegistrationValidationError: If a field is missing or blank.
            AlreadyRegisteredError: If the user already holds a ticket.
            EventFullError: If the event has reached its capacity.
            EventNotFoundError: If the event does not exist.
            InternalError: If the store fails before the registration is saved.
        """
        values = dict(
            event_id=event_id, user_id=user_id, user_name=user_name, user_email=user_email
        )
        missing = [
            name
            for name in REQUIRED_FIELDS
            if not isinstance(values[name], str) or not values[name].strip()
        ]
        if missing:
            raise RegistrationValidationError(f"{', '.join(missing)} required")
        try:
            parsed_event_id = EventId.from_string(event_id)
        except ValueError:
            raise RegistrationValidationError(
                "eventId has an invalid format", message="Invalid event ID format"
            ) from None

        logger.info("Registering user %s for event %s", user_id, parsed_event_id)
        try:
            return self._register(parsed_event_id, user_id, user_name.strip(), user_email.strip())
        except DomainError:
            raise
        except Exception as exc:
            logger.exception(
                "Registration of user %s for event %s failed", user_id, parsed_event_id
            )
            raise InternalError() from exc

    def _register(
        self, event_id: EventId, user_id: str, user_name: str, user_email: str
    ) -> Ticket:
        admission = self._guard.evaluate(event_id, user_id)
        if admission.decision is Decision.ALREADY_REGISTERED:
            raise AlreadyRegisteredError(event_id.value, user_id)
        if admission.decision is Decision.EVENT_NOT_FOUND:
            raise EventNotFoundError(event_id.value)
        if admission.decision is Decision.EVENT_FULL:
            raise EventFullError(event_id.value)
        event = admission.event

        registration = Registration(
            id=TicketId.for_registration(event_id, user_id),
            event_id=event_id,
            user_id=user_id,
            user_name=user_name,
            user_email=user_email,
            registered_at=self._clock(),
        )
        try:
            registration = self._store.create_registration(registration)
        except RegistrationConflictError:
            logger.info("Concurrent registration of user %s for event %s", user_id, event_id)
            raise AlreadyRegisteredError(event_id.value, user_id) from None
        logger.info("Registration successful: %s", registration.id)

        counter = self._counter.increment(event_id)
        notification = self._notifier.notify(
            user_email, user_name, EventSummary.of(event), registration.id
        )
        if notification is NotificationResult.FAILED:
            logger.warning("Ticket %s issued without confirmation email", registration.id)

        return Ticket(
            ticket_id=registration.id,
            event_id=event_id,
            user_id=user_id,
            registered_at=registration.registered_at,
            counter=counter,
            notification=notification,
        )
