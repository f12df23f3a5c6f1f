"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    EVENT_FULL = "EVENT_FULL"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class RegistrationValidationError(DomainError):
    """Raised when registration input is missing or malformed."""

    def __init__(self, detail: str, message: str = "Missing required fields") -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
        )
        self.detail = detail


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class AlreadyRegisteredError(DomainError):
    """Raised when the user already holds a ticket for the event."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="Already registered for this event",
        )
        self.event_id = event_id
        self.user_id = user_id


class EventFullError(DomainError):
    """Raised when the event has reached its capacity."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_FULL,
            message="Event is full",
        )
        self.event_id = event_id


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InternalError(DomainError):
    """Raised when a collaborator fails before a registration is committed."""

    def __init__(self, message: str = "Registration failed") -> None:
        super().__init__(
            code=ErrorCode.INTERNAL_ERROR,
            message=message,
        )
