"""
Shared helpers for v1 API views.

The ActorAuthenticationMiddleware resolves the session user into
request.actor before any view runs; views authorize that actor against
the access policy before invoking a handler.
"""

import uuid
from typing import Optional

from rest_framework.request import Request

from accounts.domain.access_policy import AccessPolicy, Operation
from accounts.domain.actor import Actor
from core.domain.exceptions import ForbiddenError, ValidationError

access_policy = AccessPolicy()


def authorize(request: Request, operation: Operation) -> Actor:
    """
    Return the caller after checking the operation is allowed for its role.

    Raises:
        ForbiddenError: If there is no actor or the role is not allowed
    """
    actor = getattr(request, "actor", None)
    if actor is None:
        raise ForbiddenError("Authentication required")
    access_policy.authorize(actor, operation)
    return actor


def uuid_param(request: Request, name: str) -> Optional[uuid.UUID]:
    """Parse an optional UUID query parameter."""
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ValidationError.for_field(name, "Must be a valid UUID") from exc


def int_param(request: Request, name: str, default: int) -> int:
    """Parse an optional integer query parameter."""
    value = request.query_params.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValidationError.for_field(name, "Must be an integer") from exc
