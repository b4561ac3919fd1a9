"""
DispatchExpirationAlertsHandler.

Sends one expiration alert per expiring license per day. Each alert is
claimed in the ledger under (license_id, expiration_date, notifications_sent)
before it is handed to the notifier, so repeated or concurrent runs never
send or count the same alert twice. A renewal moves the expiration date and
opens a fresh set of keys.
"""
import logging
from datetime import date

from core.domain.exceptions import ConflictError
from core.infrastructure.events import event_bus
from core.metrics import license_alerts_total
from licenses.application.commands.dispatch_expiration_alerts import (
    DispatchExpirationAlertsCommand,
)
from licenses.application.dto.license_dto import AlertDispatchResult
from licenses.domain.events import LicenseExpirationAlerted
from licenses.ports.alert_ledger import AlertLedger
from licenses.ports.alert_notifier import AlertNotifier
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DispatchExpirationAlertsHandler:
    """Handler for DispatchExpirationAlertsCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        alert_ledger: AlertLedger,
        notifier: AlertNotifier,
    ):
        """Initialize handler with repository, ledger and notifier."""
        self.license_repository = license_repository
        self.alert_ledger = alert_ledger
        self.notifier = notifier

    async def handle(self, command: DispatchExpirationAlertsCommand) -> AlertDispatchResult:
        """
        Handle dispatch command.

        Returns:
            AlertDispatchResult listing dispatched, skipped and failed licenses
        """
        today = command.today or date.today()
        alerts = await self.license_repository.find_expiring(today, command.threshold_days)
        result = AlertDispatchResult()

        for alert in alerts:
            if alert.last_checked == today:
                result.skipped.append(alert.license_id)
                license_alerts_total.labels(outcome="skipped").inc()
                continue

            sequence = alert.notifications_sent
            cycle = alert.expiration_date
            if not await self.alert_ledger.claim(alert.license_id, cycle, sequence):
                result.skipped.append(alert.license_id)
                license_alerts_total.labels(outcome="skipped").inc()
                continue

            try:
                await self.notifier.notify(alert)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Expiration alert delivery failed",
                    extra={"license_id": str(alert.license_id), "sequence": sequence},
                )
                await self.alert_ledger.release(alert.license_id, cycle, sequence)
                result.failed.append(alert.license_id)
                license_alerts_total.labels(outcome="failed").inc()
                continue

            try:
                await self.alert_ledger.complete(alert.license_id, cycle, sequence, today)
            except ConflictError:
                logger.warning(
                    "Expiration alert already recorded",
                    extra={"license_id": str(alert.license_id), "sequence": sequence},
                )
                result.skipped.append(alert.license_id)
                license_alerts_total.labels(outcome="skipped").inc()
                continue

            result.dispatched.append(alert.license_id)
            license_alerts_total.labels(outcome="dispatched").inc()
            await event_bus.publish(
                LicenseExpirationAlerted(
                    license_id=alert.license_id,
                    sequence=sequence,
                    expires_in=alert.expires_in,
                )
            )

        logger.info(
            "Expiration alerts dispatched",
            extra={
                "dispatched": len(result.dispatched),
                "skipped": len(result.skipped),
                "failed": len(result.failed),
            },
        )
        return result
