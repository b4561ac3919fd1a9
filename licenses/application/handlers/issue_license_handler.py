"""
IssueLicenseHandler.

Handler for issuing a license under a subscription.
"""
import logging

from core.domain.exceptions import SubscriptionNotFoundError
from core.infrastructure.events import event_bus
from core.metrics import licenses_issued_total
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License
from licenses.domain.license_key import DEFAULT_PREFIX
from licenses.domain.services import LicenseIssuer
from licenses.ports.license_repository import LicenseRepository
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        subscription_repository: SubscriptionRepository,
        key_prefix: str = DEFAULT_PREFIX,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.subscription_repository = subscription_repository
        self.issuer = LicenseIssuer(license_repository, key_prefix=key_prefix)

    async def handle(self, command: IssueLicenseCommand) -> License:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            Issued License entity

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist
            LicenseKeyConflictError: If the key is already taken
            ValidationError: If the dates are inconsistent
        """
        subscription = await self.subscription_repository.find_by_id(command.subscription_id)
        if not subscription:
            raise SubscriptionNotFoundError(
                f"Subscription {command.subscription_id} not found"
            )

        license = await self.issuer.issue(
            subscription_id=subscription.id,
            expiration_date=command.expiration_date or subscription.end_date,
            license_key=command.license_key,
            activation_date=command.activation_date,
            status=command.status,
            client_id=subscription.client_id,
            today=command.today,
        )

        licenses_issued_total.labels(status=license.status.value).inc()
        logger.info(
            "License issued",
            extra={
                "license_id": str(license.id),
                "subscription_id": str(subscription.id),
                "status": license.status.value,
            },
        )
        await event_bus.publish(
            LicenseIssued(
                license_id=license.id,
                subscription_id=subscription.id,
                status=license.status.value,
            )
        )
        return license
