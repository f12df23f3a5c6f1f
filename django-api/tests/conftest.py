"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest
from rest_framework.test import APIClient

EVENT_DEFAULTS: dict[str, Any] = {
    "title": "Open Mic Night",
    "description": "Bring your instrument.",
    "date": "2025-01-15",
    "time": "18:30",
    "venue": "Hall B",
    "location": "Campus North",
    "category": "music",
    "price": 10,
    "discountPrice": None,
    "capacity": 0,
    "registered": 0,
    "organizerName": "Music Club",
    "image": "",
}


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self, *responses: Any) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict]] = []
        self._responses = list(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("POST", url, **kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def ticketing_settings(settings):
    from ticketing.dependencies import reset_dependencies

    settings.TICKETING_STORE_BACKEND = "memory"
    settings.TICKETING_EVENTS_COLLECTION = "events"
    settings.TICKETING_REGISTRATIONS_COLLECTION = "registrations"
    settings.TICKETING_ADMIN_EMAILS = []
    settings.EMAILJS_SERVICE_ID = ""
    settings.EMAILJS_TEMPLATE_ID = ""
    settings.EMAILJS_PUBLIC_KEY = ""
    reset_dependencies()
    yield settings
    reset_dependencies()


@pytest.fixture
def document_store():
    """The in-memory store the views are wired to."""
    from ticketing.dependencies import get_document_store

    return get_document_store()


@pytest.fixture
def seed_event(document_store):
    def _seed(event_id: str = "E1", **attributes: Any) -> dict:
        return document_store.create_document(
            "events", event_id, {**EVENT_DEFAULTS, **attributes}
        )

    return _seed
