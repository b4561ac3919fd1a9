"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.domain.value_objects import LicenseStatus
from licenses.domain.alert import ExpiringLicense
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, license: License) -> License:
        """
        Insert a new license.

        Raises:
            LicenseKeyConflictError: If the license key already exists
        """

    @abstractmethod
    async def save_transition(self, license: License, expected_status: LicenseStatus) -> License:
        """
        Persist a transitioned license.

        The write only applies while the stored status still equals
        expected_status.

        Raises:
            ConflictError: If the stored status changed concurrently
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def list(
        self,
        subscription_id: Optional[uuid.UUID] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> List[License]:
        """List licenses, optionally filtered by subscription or client."""

    @abstractmethod
    async def find_expiring(self, today: date, threshold_days: int) -> List[ExpiringLicense]:
        """
        Find active licenses expiring within the threshold.

        Returns:
            Alert records for licenses with 0 <= days left <= threshold_days
        """

    @abstractmethod
    async def find_overdue(self, today: date) -> List[License]:
        """Find active licenses whose expiration date is before today."""

    @abstractmethod
    async def count_by_status(self, status: LicenseStatus) -> int:
        """Count licenses in a status."""
