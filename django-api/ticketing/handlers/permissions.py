from rest_framework.permissions import BasePermission

from ticketing.dependencies import get_access_policy
from ticketing.services.access_policy import Identity


def identity_from_request(request) -> Identity | None:
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    pk = getattr(user, "pk", None)
    return Identity(
        user_id=str(pk) if pk is not None else None,
        email=getattr(user, "email", None),
    )


class PolicyPermission(BasePermission):
    """Grants access when the access policy allows the view's ``required_action``."""

    message = "Not authorized"

    def has_permission(self, request, view) -> bool:
        action = getattr(view, "required_action", None)
        if action is None:
            return False
        return get_access_policy().is_authorized(identity_from_request(request), action)


class OwnerOrPolicyPermission(BasePermission):
    """Grants signed-in users access to their own records.

    The owner is named by the query parameter ``view.owner_param``. Anyone
    else needs the policy to allow ``view.required_action``. A missing owner
    is let through so the view can answer with a validation error.
    """

    message = "Not authorized"

    def has_permission(self, request, view) -> bool:
        identity = identity_from_request(request)
        if identity is None:
            return False
        owner = (request.query_params.get(view.owner_param) or "").strip()
        if not owner or owner == identity.user_id:
            return True
        return get_access_policy().is_authorized(identity, view.required_action)
