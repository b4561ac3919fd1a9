"""
Staff repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod


class StaffRepository(ABC):
    """Lookup of vendor staff members."""

    @abstractmethod
    async def is_active(self, staff_id: uuid.UUID) -> bool:
        """Check that a staff member exists and is active."""
