"""Registration confirmation delivery.

Notifiers are best effort: ``notify`` reports FAILED instead of raising, so a
confirmation that cannot be delivered never undoes a registration.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from urllib.parse import quote

import requests

from ticketing.domain import EventSummary, NotificationResult, TicketId

logger = logging.getLogger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"
QR_CODE_URL = "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data={data}"
DEFAULT_TIMEOUT = 5.0


class NotificationError(Exception):
    """The delivery provider rejected or did not answer a message."""


def ticket_qr_code_url(ticket_id: TicketId, user_name: str, event_title: str) -> str:
    """Return an image URL of the QR code scanned at venue check-in."""
    data = f"TICKET|{ticket_id}|{user_name}|{event_title}"
    return QR_CODE_URL.format(data=quote(data, safe=""))


def format_event_date(value: str) -> str:
    """Format an ISO date as e.g. "Monday, January 15, 2025"."""
    try:
        date = datetime.fromisoformat(value)
    except ValueError:
        return value
    return f"{date:%A}, {date:%B} {date.day}, {date.year}"


class Notifier(ABC):
    """Delivers a confirmation to a freshly registered attendee."""

    def notify(
        self,
        user_email: str,
        user_name: str,
        summary: EventSummary,
        ticket_id: TicketId,
    ) -> NotificationResult:
        try:
            self.deliver(user_email, user_name, summary, ticket_id)
        except Exception:
            logger.warning(
                "Failed to send registration confirmation for ticket %s",
                ticket_id,
                exc_info=True,
            )
            return NotificationResult.FAILED
        logger.info("Registration confirmation sent for ticket %s", ticket_id)
        return NotificationResult.SENT

    @abstractmethod
    def deliver(
        self,
        user_email: str,
        user_name: str,
        summary: EventSummary,
        ticket_id: TicketId,
    ) -> None:
        """Send the confirmation, raising on any failure."""
        ...


class LoggingNotifier(Notifier):
    """Stand-in used when no email provider is configured."""

    def deliver(
        self,
        user_email: str,
        user_name: str,
        summary: EventSummary,
        ticket_id: TicketId,
    ) -> None:
        logger.info(
            "Email delivery not configured; ticket %s for %r not mailed",
            ticket_id,
            summary.title,
        )


class EmailJSNotifier(Notifier):
    """Sends the confirmation through an EmailJS template."""

    def __init__(
        self,
        service_id: str,
        template_id: str,
        public_key: str,
        private_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._service_id = service_id
        self._template_id = template_id
        self._public_key = public_key
        self._private_key = private_key
        self._timeout = timeout
        self._session = session or requests.Session()

    def template_params(
        self,
        user_email: str,
        user_name: str,
        summary: EventSummary,
        ticket_id: TicketId,
    ) -> dict[str, str]:
        return {
            "to_email": user_email,
            "to_name": user_name,
            "event_title": summary.title,
            "event_date": format_event_date(summary.date),
            "event_time": summary.time,
            "event_venue": summary.venue,
            "event_location": summary.location,
            "ticket_id": str(ticket_id),
            "qr_code_url": ticket_qr_code_url(ticket_id, user_name, summary.title),
            "organizer_name": summary.organizer_name,
            "event_price": str(summary.price),
        }

    def deliver(
        self,
        user_email: str,
        user_name: str,
        summary: EventSummary,
        ticket_id: TicketId,
    ) -> None:
        payload = {
            "service_id": self._service_id,
            "template_id": self._template_id,
            "user_id": self._public_key,
            "template_params": self.template_params(user_email, user_name, summary, ticket_id),
        }
        if self._private_key:
            payload["accessToken"] = self._private_key

        response = self._session.post(EMAILJS_SEND_URL, json=payload, timeout=self._timeout)
        if response.status_code != 200:
            raise NotificationError(
                f"EmailJS answered {response.status_code}: {response.text[:200]}"
            )
