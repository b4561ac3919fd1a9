"""
Resolves Django users into domain actors.
"""
import logging
from typing import Optional

from accounts.domain.actor import Actor
from accounts.infrastructure.models import Staff, UserProfile
from core.domain.value_objects import Role

logger = logging.getLogger(__name__)


def resolve_actor(user) -> Optional[Actor]:
    """
    Build the Actor for an authenticated user.

    Superusers without a profile act as admin. Returns None when the
    user has no role assignment.
    """
    # pylint: disable=no-member
    profile = UserProfile.objects.filter(user_id=user.pk).only("role").first()
    if profile is None:
        if not user.is_superuser:
            return None
        role = Role.ADMIN
    else:
        role = Role(profile.role)

    client_id = None
    staff_id = None
    if role is Role.CLIENT:
        from clients.infrastructure.models import Client

        client_id = Client.objects.filter(user_id=user.pk).values_list("id", flat=True).first()
    else:
        staff_id = Staff.objects.filter(user_id=user.pk).values_list("id", flat=True).first()

    return Actor(user_id=user.pk, role=role, client_id=client_id, staff_id=staff_id)
