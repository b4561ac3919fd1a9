"""
ExpireLicensesHandler.

Handler for the expiry sweep.
"""
import logging
from datetime import date

from core.domain.exceptions import ConflictError
from core.infrastructure.events import event_bus
from core.metrics import license_transitions_total
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.dto.license_dto import ExpirySweepResult
from licenses.domain.events import LicenseExpired
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExpireLicensesHandler:
    """Handler for ExpireLicensesCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ExpireLicensesCommand) -> ExpirySweepResult:
        """
        Handle expiry sweep command.

        A license whose status changed since it was loaded is reported
        as a conflict and left alone.

        Returns:
            ExpirySweepResult with expired and conflicting license IDs
        """
        today = command.today or date.today()
        overdue = await self.license_repository.find_overdue(today)
        result = ExpirySweepResult(dry_run=command.dry_run)

        for license in overdue:
            if command.dry_run:
                result.expired.append(license.id)
                continue
            try:
                expired = await self.license_repository.save_transition(
                    license.expire(today), license.status
                )
            except ConflictError:
                logger.warning(
                    "License changed during expiry sweep",
                    extra={"license_id": str(license.id)},
                )
                result.conflicts.append(license.id)
                continue
            license_transitions_total.labels(transition="expire").inc()
            result.expired.append(expired.id)
            await event_bus.publish(LicenseExpired(license_id=expired.id))

        logger.info(
            "Expiry sweep finished",
            extra={
                "expired": result.expired_count,
                "conflicts": len(result.conflicts),
                "dry_run": command.dry_run,
            },
        )
        return result
