"""Authorization policies.

Call sites ask ``is_authorized(identity, action)`` and never look at how
the answer is produced, so an allowlist can later give way to roles or
claims without touching views.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

VIEW_REGISTRATIONS = "registrations.view"
VIEW_ANY_REGISTRATIONS = "registrations.view_any"


@dataclass(frozen=True)
class Identity:
    """Who is asking."""

    user_id: str | None
    email: str | None


class AccessPolicy(ABC):
    @abstractmethod
    def is_authorized(self, identity: Identity | None, action: str) -> bool:
        ...


class DenyAllPolicy(AccessPolicy):
    def is_authorized(self, identity: Identity | None, action: str) -> bool:
        return False


class EmailAllowlistPolicy(AccessPolicy):
    """Grants every action to identities whose email is on the list."""

    def __init__(self, emails: Iterable[str]) -> None:
        self._emails = frozenset(
            email.strip().lower() for email in emails if email and email.strip()
        )

    def is_authorized(self, identity: Identity | None, action: str) -> bool:
        if identity is None or not identity.email:
            return False
        return identity.email.strip().lower() in self._emails
