"""
License query handlers.
"""
from datetime import date
from typing import List

from accounts.domain.access_policy import AccessPolicy
from core.domain.exceptions import LicenseNotFoundError, ValidationError
from licenses.application.queries.get_expiring_licenses import GetExpiringLicensesQuery
from licenses.application.queries.get_license import GetLicenseQuery, ListLicensesQuery
from licenses.domain.alert import ExpiringLicense
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.license_repository = license_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetLicenseQuery) -> License:
        """
        Handle get license query.

        Raises:
            LicenseNotFoundError: If missing (staff callers)
            ForbiddenError: If missing or foreign (client callers)
        """
        license = await self.license_repository.find_by_id(query.license_id)
        self.access_policy.ensure_readable(
            query.actor,
            license.client_id if license else None,
            LicenseNotFoundError(f"License {query.license_id} not found"),
        )
        return license


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.license_repository = license_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: ListLicensesQuery) -> List[License]:
        """Handle list licenses query."""
        client_id = self.access_policy.scope_client(query.actor, query.client_id)
        return await self.license_repository.list(
            subscription_id=query.subscription_id, client_id=client_id
        )


class GetExpiringLicensesHandler:
    """Handler for GetExpiringLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: GetExpiringLicensesQuery) -> List[ExpiringLicense]:
        """
        Handle expiring licenses query.

        Returns:
            Alert records for active licenses with 0 <= days left <= threshold
        """
        if query.threshold_days < 0:
            raise ValidationError.for_field("days", "Threshold cannot be negative")
        return await self.license_repository.find_expiring(
            query.today or date.today(), query.threshold_days
        )
