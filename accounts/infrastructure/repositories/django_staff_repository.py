"""
Django implementation of StaffRepository port.
"""
import uuid

from asgiref.sync import sync_to_async

from accounts.infrastructure.models import Staff
from accounts.ports.staff_repository import StaffRepository


class DjangoStaffRepository(StaffRepository):
    """Django ORM implementation of StaffRepository."""

    @sync_to_async
    def is_active(self, staff_id: uuid.UUID) -> bool:
        """Check that a staff member exists and is active."""
        return Staff.objects.filter(id=staff_id, is_active=True).exists()  # pylint: disable=no-member
