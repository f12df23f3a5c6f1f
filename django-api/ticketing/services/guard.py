"""Admission check for a registration request."""

from dataclasses import dataclass

from ticketing.domain import Decision, Event, EventId
from ticketing.stores.interfaces import EventStore


@dataclass(frozen=True)
class Admission:
    decision: Decision
    event: Event | None = None


class RegistrationGuard:
    """Decides whether a user may register for an event.

    This is a read-only check. It does not reserve anything, so the decision
    can be stale by the time the registration is written; the duplicate case
    is closed by the store rejecting a second ticket with the same id.
    Store failures propagate to the caller.
    """

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def admit(self, event_id: EventId, user_id: str) -> Decision:
        return self.evaluate(event_id, user_id).decision

    def evaluate(self, event_id: EventId, user_id: str) -> Admission:
        """Like ``admit`` but also hands back the event that was read."""
        if self._store.find_registration(event_id, user_id) is not None:
            return Admission(Decision.ALREADY_REGISTERED)

        event = self._store.get_event(event_id)
        if event is None:
            return Admission(Decision.EVENT_NOT_FOUND)

        if event.is_full:
            return Admission(Decision.EVENT_FULL, event)

        return Admission(Decision.ADMIT, event)
