"""Best-effort maintenance of Event.registered_count."""

import logging

from ticketing.domain import CounterResult, EventId
from ticketing.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class CapacityCounter:
    """Read-modify-write increment of an event's registration count.

    Runs after the registration is committed, so it never raises.
    """

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def increment(self, event_id: EventId) -> CounterResult:
        try:
            event = self._store.get_event(event_id)
            if event is None:
                logger.warning("Event %s vanished before its count was updated", event_id)
                return CounterResult.WARNING
            count = event.registered_count + 1
            self._store.set_registered_count(event_id, count)
        except Exception:
            logger.warning(
                "Failed to update registered count for event %s", event_id, exc_info=True
            )
            return CounterResult.WARNING

        logger.info("Updated registered count of event %s to %d", event_id, count)
        return CounterResult.OK
