from ticketing.handlers.views import (
    EventDetailView,
    EventListView,
    EventRegistrationListView,
    HealthView,
    RegisterView,
    UserRegistrationListView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventRegistrationListView",
    "HealthView",
    "RegisterView",
    "UserRegistrationListView",
]
