"""Store interfaces (repository pattern).

Stores must be swappable. DocumentStore speaks raw documents keyed by
collection name and document id; EventStore returns domain models.
"""

from abc import ABC, abstractmethod
from typing import Any

from ticketing.domain import Event, EventId, Registration


class DocumentStoreError(Exception):
    """The document store is unreachable or answered with something unusable."""


class DocumentConflictError(DocumentStoreError):
    """A document with the requested id already exists."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document {collection}/{document_id} already exists")
        self.collection = collection
        self.document_id = document_id


class DocumentNotFoundError(DocumentStoreError):
    """The document targeted by an update does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document {collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class RegistrationConflictError(Exception):
    """A registration for the same event and user was already persisted."""


Document = dict[str, Any]


class DocumentStore(ABC):
    """Interface for a hosted document collection API.

    Every returned document carries its id under the ``$id`` key.
    """

    @abstractmethod
    def get_document(self, collection: str, document_id: str) -> Document | None:
        """Return a document by id, or None if not found."""
        ...

    @abstractmethod
    def list_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        """Return documents whose attributes equal every filter value."""
        ...

    @abstractmethod
    def create_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        """Create a document.

        Raises:
            DocumentConflictError: If the id is already taken.
        """
        ...

    @abstractmethod
    def update_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        """Merge ``data`` into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the store answers."""
        ...


class EventStore(ABC):
    """Interface for event and registration persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return upcoming events ordered by date ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def set_registered_count(self, event_id: EventId, count: int) -> None:
        """Overwrite the denormalized registration count of an event."""
        ...

    @abstractmethod
    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        """Return the registration of a user for an event, or None."""
        ...

    @abstractmethod
    def create_registration(self, registration: Registration) -> Registration:
        """Persist a new registration.

        Raises:
            RegistrationConflictError: If the ticket id is already taken.
        """
        ...

    @abstractmethod
    def list_registrations_for_user(self, user_id: str) -> list[Registration]:
        """Return a user's registrations, newest first."""
        ...

    @abstractmethod
    def list_registrations_for_event(self, event_id: EventId) -> list[Registration]:
        """Return all registrations of an event, oldest first."""
        ...
