"""
Dependency wiring: builds the configured collaborators from Django settings.
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ticketing.services.access_policy import (
    AccessPolicy,
    DenyAllPolicy,
    EmailAllowlistPolicy,
)
from ticketing.services.event_service import EventService
from ticketing.services.notifier import EmailJSNotifier, LoggingNotifier, Notifier
from ticketing.services.registration_service import RegistrationService
from ticketing.stores.appwrite_store import AppwriteDocumentStore
from ticketing.stores.django_store import DjangoDocumentStore
from ticketing.stores.event_store import DocumentEventStore
from ticketing.stores.interfaces import DocumentStore
from ticketing.stores.memory_store import InMemoryDocumentStore

_document_store: DocumentStore | None = None
_notifier: Notifier | None = None


def reset_dependencies() -> None:
    """Drop cached collaborators so the next request rebuilds them from settings."""
    global _document_store, _notifier
    _document_store = None
    _notifier = None


def _build_document_store() -> DocumentStore:
    backend = settings.TICKETING_STORE_BACKEND
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "django":
        return DjangoDocumentStore()
    if backend == "appwrite":
        missing = [
            name
            for name in ("APPWRITE_ENDPOINT", "APPWRITE_PROJECT_ID", "APPWRITE_DATABASE_ID")
            if not getattr(settings, name, None)
        ]
        if missing:
            raise ImproperlyConfigured(
                f"Appwrite document store requires {', '.join(missing)}"
            )
        return AppwriteDocumentStore(
            endpoint=settings.APPWRITE_ENDPOINT,
            project_id=settings.APPWRITE_PROJECT_ID,
            database_id=settings.APPWRITE_DATABASE_ID,
            api_key=settings.APPWRITE_API_KEY or None,
            timeout=settings.TICKETING_HTTP_TIMEOUT,
        )
    raise ImproperlyConfigured(f"Unknown TICKETING_STORE_BACKEND {backend!r}")


def get_document_store() -> DocumentStore:
    """
    Return a singleton document store so in-memory state persists across requests.
    """
    global _document_store
    if _document_store is None:
        _document_store = _build_document_store()
    return _document_store


def get_event_store() -> DocumentEventStore:
    return DocumentEventStore(
        get_document_store(),
        events_collection=settings.TICKETING_EVENTS_COLLECTION,
        registrations_collection=settings.TICKETING_REGISTRATIONS_COLLECTION,
    )


def get_notifier() -> Notifier:
    global _notifier
    if _notifier is not None:
        return _notifier

    if settings.EMAILJS_SERVICE_ID and settings.EMAILJS_TEMPLATE_ID and settings.EMAILJS_PUBLIC_KEY:
        _notifier = EmailJSNotifier(
            service_id=settings.EMAILJS_SERVICE_ID,
            template_id=settings.EMAILJS_TEMPLATE_ID,
            public_key=settings.EMAILJS_PUBLIC_KEY,
            private_key=settings.EMAILJS_PRIVATE_KEY or None,
            timeout=settings.TICKETING_HTTP_TIMEOUT,
        )
    else:
        _notifier = LoggingNotifier()
    return _notifier


def get_access_policy() -> AccessPolicy:
    if settings.TICKETING_ADMIN_EMAILS:
        return EmailAllowlistPolicy(settings.TICKETING_ADMIN_EMAILS)
    return DenyAllPolicy()


def get_registration_service() -> RegistrationService:
    return RegistrationService(get_event_store(), get_notifier())


def get_event_service() -> EventService:
    return EventService(get_event_store())
