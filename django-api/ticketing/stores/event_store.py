"""EventStore backed by any DocumentStore.

Attribute names follow the hosted collections: events keep their
denormalized registration count under ``registered``; registrations use
camelCase keys.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from ticketing.domain import Capacity, Event, EventId, Money, Registration, TicketId
from ticketing.stores.interfaces import (
    Document,
    DocumentConflictError,
    DocumentStore,
    DocumentStoreError,
    EventStore,
    RegistrationConflictError,
)

EVENTS_COLLECTION = "events"
REGISTRATIONS_COLLECTION = "registrations"
UPCOMING_EVENTS_LIMIT = 100


def _money(value: Any) -> Money | None:
    if value is None or value == "":
        return None
    try:
        return Money(Decimal(str(value)))
    except (InvalidOperation, ValueError) as exc:
        raise DocumentStoreError(f"Malformed price {value!r}") from exc


def _capacity(value: Any) -> Capacity | None:
    # 0 and missing both mean unlimited.
    if not value:
        return None
    try:
        return Capacity(int(value))
    except (TypeError, ValueError) as exc:
        raise DocumentStoreError(f"Malformed capacity {value!r}") from exc


def event_from_document(document: Document) -> Event:
    try:
        return Event(
            id=EventId.from_string(document["$id"]),
            title=document.get("title", ""),
            description=document.get("description", ""),
            date=document.get("date", ""),
            time=document.get("time", ""),
            venue=document.get("venue", ""),
            location=document.get("location", ""),
            category=document.get("category", ""),
            price=_money(document.get("price")) or Money(Decimal("0")),
            discount_price=_money(document.get("discountPrice")),
            capacity=_capacity(document.get("capacity")),
            registered_count=int(document.get("registered") or 0),
            organizer_name=document.get("organizerName", ""),
            image_url=document.get("image") or None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise DocumentStoreError(f"Malformed event document: {exc}") from exc


def registration_from_document(document: Document) -> Registration:
    try:
        registered_at = datetime.fromisoformat(document["registeredAt"].replace("Z", "+00:00"))
        return Registration(
            id=TicketId(document["$id"]),
            event_id=EventId.from_string(document["eventId"]),
            user_id=document["userId"],
            user_name=document["userName"],
            user_email=document["userEmail"],
            registered_at=registered_at,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DocumentStoreError(f"Malformed registration document: {exc}") from exc


def registration_to_document(registration: Registration) -> dict[str, Any]:
    registered_at = registration.registered_at.astimezone(timezone.utc)
    return {
        "eventId": registration.event_id.value,
        "userId": registration.user_id,
        "userName": registration.user_name,
        "userEmail": registration.user_email,
        "registeredAt": registered_at.isoformat().replace("+00:00", "Z"),
    }


class DocumentEventStore(EventStore):
    """Maps event and registration documents to domain models."""

    def __init__(
        self,
        documents: DocumentStore,
        events_collection: str = EVENTS_COLLECTION,
        registrations_collection: str = REGISTRATIONS_COLLECTION,
    ) -> None:
        self.documents = documents
        self._events = events_collection
        self._registrations = registrations_collection

    def list_events(self) -> list[Event]:
        documents = self.documents.list_documents(
            self._events, order_by="date", limit=UPCOMING_EVENTS_LIMIT
        )
        return [event_from_document(document) for document in documents]

    def get_event(self, event_id: EventId) -> Event | None:
        document = self.documents.get_document(self._events, event_id.value)
        return event_from_document(document) if document is not None else None

    def set_registered_count(self, event_id: EventId, count: int) -> None:
        self.documents.update_document(self._events, event_id.value, {"registered": count})

    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        documents = self.documents.list_documents(
            self._registrations,
            filters={"eventId": event_id.value, "userId": user_id},
            limit=1,
        )
        return registration_from_document(documents[0]) if documents else None

    def create_registration(self, registration: Registration) -> Registration:
        try:
            self.documents.create_document(
                self._registrations,
                registration.id.value,
                registration_to_document(registration),
            )
        except DocumentConflictError as exc:
            raise RegistrationConflictError(str(exc)) from exc
        return registration

    def list_registrations_for_user(self, user_id: str) -> list[Registration]:
        documents = self.documents.list_documents(
            self._registrations,
            filters={"userId": user_id},
            order_by="registeredAt",
            descending=True,
        )
        return [registration_from_document(document) for document in documents]

    def list_registrations_for_event(self, event_id: EventId) -> list[Registration]:
        documents = self.documents.list_documents(
            self._registrations,
            filters={"eventId": event_id.value},
            order_by="registeredAt",
        )
        return [registration_from_document(document) for document in documents]
