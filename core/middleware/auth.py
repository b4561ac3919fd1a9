"""
Actor authentication middleware.

Resolves the session user into the domain Actor used by the access
policy and rejects unauthenticated API calls.
"""

import logging
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse, JsonResponse

from accounts.infrastructure.actor_resolver import resolve_actor

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"


def error_response(code: str, message: str, status: int) -> JsonResponse:
    """JSON error body in the API's error format."""
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class ActorAuthenticationMiddleware:
    """
    Middleware attaching request.actor for API requests.

    This middleware:
    1. Leaves non-API paths (admin, health, docs) alone
    2. Returns 401 when no user is logged in
    3. Returns 403 when the user has no role assignment
    4. Sets request.actor otherwise

    Must run after django.contrib.auth's AuthenticationMiddleware.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Authenticate API requests."""
        request.actor = None  # type: ignore
        if request.path.startswith(API_PREFIX):
            rejection = self._authenticate(request)
            if rejection is not None:
                return rejection
        return self.get_response(request)

    def _authenticate(self, request: HttpRequest) -> Optional[HttpResponse]:
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return error_response("UNAUTHENTICATED", "Authentication required", 401)

        actor = resolve_actor(user)
        if actor is None:
            logger.warning("User without role assignment", extra={"user_id": user.pk})
            return error_response("FORBIDDEN", "User has no role assigned", 403)

        request.actor = actor  # type: ignore
        return None
