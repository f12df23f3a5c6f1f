"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from datetime import datetime, timezone

from django.core.exceptions import ImproperlyConfigured
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.dependencies import (
    get_document_store,
    get_event_service,
    get_registration_service,
)
from ticketing.domain.errors import DomainError, ErrorCode
from ticketing.handlers.permissions import OwnerOrPolicyPermission, PolicyPermission
from ticketing.handlers.serializers import (
    EventSerializer,
    RegisterRequestSerializer,
    RegistrationSerializer,
)
from ticketing.services.access_policy import VIEW_ANY_REGISTRATIONS, VIEW_REGISTRATIONS
from ticketing.stores.interfaces import DocumentStoreError

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.EVENT_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

REQUIRED_FIELDS_MESSAGE = "eventId, userId, userName, and userEmail are required"
STRING_FIELDS_MESSAGE = "eventId, userId, userName, and userEmail must be strings"
LENGTH_MESSAGE = "eventId, userId, userName, or userEmail is too long"
MISSING_CODES = {"required", "blank", "null"}


class TicketingView(APIView):
    """Base view mapping domain and backend failures to JSON responses."""

    permission_classes = [AllowAny]

    def error_response(self, error: DomainError) -> Response:
        return Response(
            {"code": error.code.value, "message": error.message},
            status=STATUS_BY_CODE[error.code],
        )

    def internal_error_response(self) -> Response:
        return Response(
            {"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return self.error_response(exc)
        if isinstance(exc, (DocumentStoreError, ImproperlyConfigured)):
            logger.error(
                "%s %s failed", self.request.method, self.request.path, exc_info=exc
            )
            return self.internal_error_response()
        return super().handle_exception(exc)


class RegisterView(TicketingView):
    """Handler for POST /api/events/register"""

    @staticmethod
    def failure(http_status: int, message: str, error: str) -> Response:
        return Response(
            {"success": False, "message": message, "error": error}, status=http_status
        )

    def error_response(self, error: DomainError) -> Response:
        detail = getattr(error, "detail", error.message)
        return self.failure(STATUS_BY_CODE[error.code], error.message, detail)

    def internal_error_response(self) -> Response:
        return self.failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Registration failed",
            "Registration service unavailable",
        )

    def post(self, request: Request) -> Response:
        try:
            data = request.data
        except ParseError:
            return self.failure(
                status.HTTP_400_BAD_REQUEST, "Malformed request body", REQUIRED_FIELDS_MESSAGE
            )

        serializer = RegisterRequestSerializer(data=data)
        if not serializer.is_valid():
            codes = {
                getattr(detail, "code", None)
                for details in serializer.errors.values()
                for detail in details
            }
            if codes & MISSING_CODES:
                return self.failure(
                    status.HTTP_400_BAD_REQUEST, "Missing required fields", REQUIRED_FIELDS_MESSAGE
                )
            detail = STRING_FIELDS_MESSAGE if "invalid" in codes else LENGTH_MESSAGE
            return self.failure(
                status.HTTP_400_BAD_REQUEST, "Invalid registration request", detail
            )
        body = serializer.validated_data

        ticket = get_registration_service().register(
            event_id=body["eventId"],
            user_id=body["userId"],
            user_name=body["userName"],
            user_email=body["userEmail"],
        )
        return Response(
            {
                "success": True,
                "message": "Registration successful",
                "ticketId": ticket.ticket_id.value,
            },
            status=status.HTTP_200_OK,
        )


class EventListView(TicketingView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        events = get_event_service().list_events()
        return Response(EventSerializer(events, many=True).data)


class EventDetailView(TicketingView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = get_event_service().get_event(event_id)
        return Response(EventSerializer(event).data)


class EventRegistrationListView(TicketingView):
    """Handler for GET /api/events/{event_id}/registrations (admins only)"""

    permission_classes = [PolicyPermission]
    required_action = VIEW_REGISTRATIONS

    def get(self, request: Request, event_id: str) -> Response:
        registrations = get_event_service().list_registrations_for_event(event_id)
        return Response(RegistrationSerializer(registrations, many=True).data)


class UserRegistrationListView(TicketingView):
    """Handler for GET /api/registrations?userId=

    Signed-in users see their own tickets; the access policy may grant
    everyone's.
    """

    permission_classes = [OwnerOrPolicyPermission]
    owner_param = "userId"
    required_action = VIEW_ANY_REGISTRATIONS

    def get(self, request: Request) -> Response:
        registrations = get_event_service().list_registrations_for_user(
            request.query_params.get(self.owner_param)
        )
        return Response(RegistrationSerializer(registrations, many=True).data)


class HealthView(TicketingView):
    """Handler for GET /api/health"""

    def get(self, request: Request) -> Response:
        try:
            store_state = "healthy" if get_document_store().ping() else "unreachable"
        except ImproperlyConfigured:
            store_state = "unconfigured"

        healthy = store_state == "healthy"
        return Response(
            {
                "status": "operational" if healthy else "degraded",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "services": {"documentStore": store_state},
            },
            status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
