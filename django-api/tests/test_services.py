"""Unit tests for the registration and catalog services.

These test admission decisions, ordering around the commit point and
domain error mapping, against in-memory stores and test doubles.
Run with: pytest tests/test_services.py -v
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from ticketing.domain import (
    CounterResult,
    Decision,
    EventId,
    EventSummary,
    Money,
    NotificationResult,
    TicketId,
)
from ticketing.domain.errors import (
    AlreadyRegisteredError,
    EventFullError,
    EventNotFoundError,
    InternalError,
    InvalidEventIdError,
    RegistrationValidationError,
)
from ticketing.services.access_policy import (
    DenyAllPolicy,
    EmailAllowlistPolicy,
    Identity,
    VIEW_REGISTRATIONS,
)
from ticketing.services.counter import CapacityCounter
from ticketing.services.event_service import EventService
from ticketing.services.guard import RegistrationGuard
from ticketing.services.notifier import Notifier
from ticketing.services.registration_service import RegistrationService
from ticketing.stores.event_store import DocumentEventStore
from ticketing.stores.interfaces import DocumentStoreError
from ticketing.stores.memory_store import InMemoryDocumentStore

from tests.conftest import EVENT_DEFAULTS

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, EventSummary, TicketId]] = []

    def deliver(self, user_email, user_name, summary, ticket_id) -> None:
        self.sent.append((user_email, user_name, summary, ticket_id))


class FailingNotifier(Notifier):
    def deliver(self, user_email, user_name, summary, ticket_id) -> None:
        raise ConnectionError("smtp down")


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def store(documents) -> DocumentEventStore:
    return DocumentEventStore(documents)


@pytest.fixture
def add_event(documents):
    def _add(event_id: str = "E1", **attributes) -> None:
        documents.create_document("events", event_id, {**EVENT_DEFAULTS, **attributes})

    return _add


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(store, notifier) -> RegistrationService:
    return RegistrationService(store, notifier, clock=lambda: NOW)


def registrations_of(documents: InMemoryDocumentStore) -> list[dict]:
    return documents.list_documents("registrations")


class TestRegistrationGuard:
    """Tests for RegistrationGuard."""

    def test_admits_new_user_under_capacity(self, store, add_event):
        """Given room and no prior ticket, admits."""
        add_event(capacity=2, registered=1)
        assert RegistrationGuard(store).admit(EventId("E1"), "U1") is Decision.ADMIT

    def test_existing_registration_wins_over_missing_event(self, store, service, add_event):
        """The duplicate check runs before the event lookup."""
        add_event()
        service.register("E1", "U1", "Ada", "ada@example.com")
        store.documents.collections["events"].clear()
        assert RegistrationGuard(store).admit(EventId("E1"), "U1") is Decision.ALREADY_REGISTERED

    def test_missing_event(self, store):
        """Given no such event, returns EVENT_NOT_FOUND."""
        assert RegistrationGuard(store).admit(EventId("nope"), "U1") is Decision.EVENT_NOT_FOUND

    def test_full_event(self, store, add_event):
        """Given count at capacity, returns EVENT_FULL."""
        add_event(capacity=3, registered=3)
        assert RegistrationGuard(store).admit(EventId("E1"), "U1") is Decision.EVENT_FULL

    def test_zero_capacity_means_unlimited(self, store, add_event):
        """A stored capacity of 0 does not limit admissions."""
        add_event(capacity=0, registered=500)
        assert RegistrationGuard(store).admit(EventId("E1"), "U1") is Decision.ADMIT

    def test_store_failure_propagates(self):
        """Store errors abort admission instead of admitting blindly."""
        broken = Mock()
        broken.find_registration.side_effect = DocumentStoreError("unreachable")
        with pytest.raises(DocumentStoreError):
            RegistrationGuard(broken).admit(EventId("E1"), "U1")


class TestCapacityCounter:
    """Tests for CapacityCounter."""

    def test_increment_updates_count(self, store, documents, add_event):
        """Increments the stored count by one."""
        add_event(registered=4)
        assert CapacityCounter(store).increment(EventId("E1")) is CounterResult.OK
        assert documents.get_document("events", "E1")["registered"] == 5

    def test_missing_count_starts_at_zero(self, store, documents, add_event):
        """An event without a count is treated as zero."""
        add_event(registered=None)
        CapacityCounter(store).increment(EventId("E1"))
        assert documents.get_document("events", "E1")["registered"] == 1

    def test_missing_event_is_a_warning(self, store):
        """A vanished event downgrades to WARNING."""
        assert CapacityCounter(store).increment(EventId("E1")) is CounterResult.WARNING

    def test_store_failure_is_swallowed(self, caplog):
        """Store errors are logged and downgraded, never raised."""
        broken = Mock()
        broken.get_event.side_effect = DocumentStoreError("timeout")
        assert CapacityCounter(broken).increment(EventId("E1")) is CounterResult.WARNING
        assert "Failed to update registered count" in caplog.text


class TestRegistrationService:
    """Tests for RegistrationService."""

    def test_register_returns_ticket(self, service, documents, add_event, notifier):
        """Given a valid request under capacity, returns a ticket and persists it."""
        add_event(capacity=10, registered=0)

        ticket = service.register("E1", "U1", "Ada", "ada@example.com")

        assert ticket.ticket_id.value
        assert ticket.counter is CounterResult.OK
        assert ticket.notification is NotificationResult.SENT
        saved = registrations_of(documents)
        assert len(saved) == 1
        assert saved[0]["$id"] == ticket.ticket_id.value
        assert saved[0]["eventId"] == "E1"
        assert saved[0]["userId"] == "U1"
        assert saved[0]["registeredAt"] == "2025-01-10T12:00:00Z"
        assert documents.get_document("events", "E1")["registered"] == 1
        assert notifier.sent[0][0] == "ada@example.com"
        assert notifier.sent[0][3] == ticket.ticket_id

    def test_register_twice_conflicts(self, service, documents, add_event):
        """Second identical request is AlreadyRegistered with one document persisted."""
        add_event()
        service.register("E1", "U1", "Ada", "ada@example.com")

        with pytest.raises(AlreadyRegisteredError):
            service.register("E1", "U1", "Ada", "ada@example.com")
        assert len(registrations_of(documents)) == 1

    def test_full_event_creates_nothing(self, service, documents, add_event):
        """Given capacity N and count N, raises EventFull and writes nothing."""
        add_event(capacity=5, registered=5)

        with pytest.raises(EventFullError):
            service.register("E1", "U9", "Bob", "bob@example.com")
        assert registrations_of(documents) == []

    def test_unknown_event(self, service):
        """Given a non-existent event, raises EventNotFound."""
        with pytest.raises(EventNotFoundError):
            service.register("missing", "U1", "Ada", "ada@example.com")

    @pytest.mark.parametrize(
        "field", ["event_id", "user_id", "user_name", "user_email"]
    )
    @pytest.mark.parametrize("bad_value", [None, "", "   "])
    def test_missing_field_touches_no_store(self, notifier, field, bad_value):
        """Missing any field fails before any store call."""
        spy = Mock(wraps=InMemoryDocumentStore())
        service = RegistrationService(DocumentEventStore(spy), notifier)
        values = dict(event_id="E1", user_id="U1", user_name="Ada", user_email="ada@example.com")
        values[field] = bad_value

        with pytest.raises(RegistrationValidationError):
            service.register(**values)
        assert spy.method_calls == []
        assert notifier.sent == []

    def test_malformed_event_id_is_validation_error(self, notifier):
        """A malformed event id is rejected before any store call."""
        spy = Mock(wraps=InMemoryDocumentStore())
        service = RegistrationService(DocumentEventStore(spy), notifier)

        with pytest.raises(RegistrationValidationError):
            service.register("../../events", "U1", "Ada", "ada@example.com")
        assert spy.method_calls == []

    def test_notification_failure_keeps_registration(self, store, documents, add_event):
        """A failing notifier never fails the registration."""
        add_event()
        service = RegistrationService(store, FailingNotifier(), clock=lambda: NOW)

        ticket = service.register("E1", "U1", "Ada", "ada@example.com")

        assert ticket.notification is NotificationResult.FAILED
        assert registrations_of(documents)[0]["$id"] == ticket.ticket_id.value

    def test_counter_failure_keeps_registration(self, documents, add_event, notifier):
        """A failing count update is downgraded; the ticket is still issued."""
        add_event()
        store = DocumentEventStore(documents)
        store.set_registered_count = Mock(side_effect=DocumentStoreError("timeout"))
        service = RegistrationService(store, notifier)

        ticket = service.register("E1", "U1", "Ada", "ada@example.com")

        assert ticket.counter is CounterResult.WARNING
        assert len(registrations_of(documents)) == 1
        assert len(notifier.sent) == 1

    def test_store_failure_before_commit_is_internal_error(self, documents, add_event, notifier):
        """Failures during admission surface as InternalError with nothing written."""
        add_event()
        store = DocumentEventStore(documents)
        store.find_registration = Mock(side_effect=DocumentStoreError("unreachable"))

        with pytest.raises(InternalError):
            RegistrationService(store, notifier).register("E1", "U1", "Ada", "ada@example.com")
        assert registrations_of(documents) == []
        assert notifier.sent == []

    def test_failed_write_notifies_nobody(self, documents, add_event, notifier):
        """If the registration write fails, no count or email follows."""
        add_event()
        store = DocumentEventStore(documents)
        store.create_registration = Mock(side_effect=DocumentStoreError("503"))

        with pytest.raises(InternalError):
            RegistrationService(store, notifier).register("E1", "U1", "Ada", "ada@example.com")
        assert documents.get_document("events", "E1")["registered"] == 0
        assert notifier.sent == []

    def test_interleaved_duplicate_is_rejected_by_store(self, documents, add_event, notifier):
        """Two requests that both pass the guard still yield one registration."""
        add_event()
        store = DocumentEventStore(documents)
        store.find_registration = Mock(return_value=None)
        service = RegistrationService(store, notifier)

        service.register("E1", "U1", "Ada", "ada@example.com")
        with pytest.raises(AlreadyRegisteredError):
            service.register("E1", "U1", "Ada", "ada@example.com")
        assert len(registrations_of(documents)) == 1
        assert documents.get_document("events", "E1")["registered"] == 1

    def test_capacity_one_scenario(self, service, documents, add_event):
        """Capacity 1: first user admitted, second full, first again duplicate."""
        add_event(capacity=1, registered=0)

        ticket = service.register("E1", "U1", "Ada", "ada@example.com")
        assert ticket.ticket_id.value
        assert documents.get_document("events", "E1")["registered"] == 1

        with pytest.raises(EventFullError):
            service.register("E1", "U2", "Bob", "bob@example.com")
        with pytest.raises(AlreadyRegisteredError):
            service.register("E1", "U1", "Ada", "ada@example.com")


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, store):
        """get_event raises InvalidEventIdError for malformed ids."""
        with pytest.raises(InvalidEventIdError):
            EventService(store).get_event("not/an/id")

    def test_get_event_not_found_raises_error(self, store):
        """get_event raises EventNotFoundError when store returns None."""
        with pytest.raises(EventNotFoundError):
            EventService(store).get_event("E404")

    def test_list_events_ordered_by_date(self, store, add_event):
        """Events come back soonest first."""
        add_event("late", date="2025-03-01")
        add_event("early", date="2025-02-01")
        assert [event.id.value for event in EventService(store).list_events()] == ["early", "late"]

    def test_registrations_for_event_not_found(self, store):
        """Attendee lists require an existing event."""
        with pytest.raises(EventNotFoundError):
            EventService(store).list_registrations_for_event("E404")

    def test_registrations_for_user_requires_user(self, store):
        """A blank user id is a validation error."""
        with pytest.raises(RegistrationValidationError):
            EventService(store).list_registrations_for_user(" ")

    def test_registrations_for_user_newest_first(self, store, add_event, notifier):
        """A user's tickets are listed newest first."""
        add_event("E1")
        add_event("E2")
        RegistrationService(
            store, notifier, clock=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc)
        ).register("E1", "U1", "Ada", "ada@example.com")
        RegistrationService(
            store, notifier, clock=lambda: datetime(2025, 1, 2, tzinfo=timezone.utc)
        ).register("E2", "U1", "Ada", "ada@example.com")

        tickets = EventService(store).list_registrations_for_user("U1")
        assert [ticket.event_id.value for ticket in tickets] == ["E2", "E1"]


class TestAccessPolicy:
    """Tests for access policies."""

    def test_allowlist_is_case_insensitive(self):
        policy = EmailAllowlistPolicy(["Admin@Club.org "])
        assert policy.is_authorized(Identity("1", " admin@club.ORG"), VIEW_REGISTRATIONS)

    def test_allowlist_rejects_others(self):
        policy = EmailAllowlistPolicy(["admin@club.org"])
        assert not policy.is_authorized(Identity("2", "member@club.org"), VIEW_REGISTRATIONS)
        assert not policy.is_authorized(Identity("3", None), VIEW_REGISTRATIONS)
        assert not policy.is_authorized(None, VIEW_REGISTRATIONS)

    def test_deny_all(self):
        assert not DenyAllPolicy().is_authorized(Identity("1", "admin@club.org"), VIEW_REGISTRATIONS)


class TestEventSummary:
    def test_summary_copies_display_fields(self, store, add_event):
        add_event(price="20", discountPrice="15.5")
        summary = EventSummary.of(store.get_event(EventId("E1")))
        assert summary.title == "Open Mic Night"
        assert summary.price == Money(Decimal("15.5"))
