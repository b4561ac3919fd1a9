"""
License lifecycle handlers.

Handlers for activate, revoke and renew license commands. Each loads
the license, applies the domain transition and persists it guarded by
the status it was loaded with.
"""
import logging
import uuid

from core.domain.exceptions import LicenseNotFoundError, SubscriptionNotFoundError
from core.infrastructure.events import event_bus
from core.metrics import license_transitions_total
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.domain.events import LicenseActivated, LicenseRenewed, LicenseRevoked
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class LicenseTransitionHandler:
    """Shared loading and guarded persistence for license transitions."""

    transition = ""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def _load(self, license_id: uuid.UUID) -> License:
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            raise LicenseNotFoundError(f"License {license_id} not found")
        return license

    async def _persist(self, current: License, transitioned: License) -> License:
        saved = await self.license_repository.save_transition(transitioned, current.status)
        license_transitions_total.labels(transition=self.transition).inc()
        logger.info(
            "License %s",
            self.transition,
            extra={
                "license_id": str(saved.id),
                "from_status": current.status.value,
                "to_status": saved.status.value,
            },
        )
        return saved


class ActivateLicenseHandler(LicenseTransitionHandler):
    """Handler for ActivateLicenseCommand."""

    transition = "activate"

    async def handle(self, command: ActivateLicenseCommand) -> License:
        """
        Handle activate license command.

        Raises:
            LicenseNotFoundError: If license not found
            InvalidTransitionError: If the license is not pending
        """
        license = await self._load(command.license_id)
        activated = await self._persist(license, license.activate(command.today))
        await event_bus.publish(LicenseActivated(license_id=activated.id))
        return activated


class RevokeLicenseHandler(LicenseTransitionHandler):
    """Handler for RevokeLicenseCommand."""

    transition = "revoke"

    async def handle(self, command: RevokeLicenseCommand) -> License:
        """
        Handle revoke license command.

        The parent subscription is left untouched.

        Raises:
            LicenseNotFoundError: If license not found
            InvalidTransitionError: If the license is not active
        """
        license = await self._load(command.license_id)
        revoked = await self._persist(license, license.revoke())
        await event_bus.publish(LicenseRevoked(license_id=revoked.id))
        return revoked


class RenewLicenseHandler(LicenseTransitionHandler):
    """Handler for RenewLicenseCommand."""

    transition = "renew"

    def __init__(
        self,
        license_repository: LicenseRepository,
        subscription_repository: SubscriptionRepository,
    ):
        """Initialize handler with repositories."""
        super().__init__(license_repository)
        self.subscription_repository = subscription_repository

    async def handle(self, command: RenewLicenseCommand) -> License:
        """
        Handle renew license command.

        Extends the expiration date by the subscription's billing period.

        Raises:
            LicenseNotFoundError: If license not found
            InvalidTransitionError: If the license is not active
        """
        license = await self._load(command.license_id)
        subscription = await self.subscription_repository.find_by_id(license.subscription_id)
        if not subscription:
            raise SubscriptionNotFoundError(
                f"Subscription {license.subscription_id} not found"
            )
        renewed = await self._persist(license, license.renew(subscription.subscription_type))
        await event_bus.publish(
            LicenseRenewed(license_id=renewed.id, new_expiration=renewed.expiration_date)
        )
        return renewed
