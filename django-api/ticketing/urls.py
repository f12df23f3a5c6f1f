from django.urls import path

from ticketing.handlers import (
    EventDetailView,
    EventListView,
    EventRegistrationListView,
    HealthView,
    RegisterView,
    UserRegistrationListView,
)

urlpatterns = [
    path("events/register", RegisterView.as_view(), name="event-register"),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registrations",
        EventRegistrationListView.as_view(),
        name="event-registration-list",
    ),
    path(
        "registrations",
        UserRegistrationListView.as_view(),
        name="user-registration-list",
    ),
    path("health", HealthView.as_view(), name="health"),
]
