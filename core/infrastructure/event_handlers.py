"""
Event handlers for domain events.

These handlers process domain events for side effects like audit
logging.
"""

import logging

from asgiref.sync import sync_to_async

from billing.domain.events import InvoiceCreated, TransactionRecorded
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    LicenseActivated,
    LicenseExpirationAlerted,
    LicenseExpired,
    LicenseIssued,
    LicenseRenewed,
    LicenseRevoked,
)

logger = logging.getLogger(__name__)

AUDITED_EVENTS = {
    LicenseIssued: ("license", "license_issued"),
    LicenseActivated: ("license", "license_activated"),
    LicenseRenewed: ("license", "license_renewed"),
    LicenseRevoked: ("license", "license_revoked"),
    LicenseExpired: ("license", "license_expired"),
    LicenseExpirationAlerted: ("license", "license_expiration_alerted"),
    InvoiceCreated: ("invoice", "invoice_created"),
    TransactionRecorded: ("transaction", "transaction_recorded"),
}


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs every domain event and writes it to the AuditLog table.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        entity_type, action = AUDITED_EVENTS.get(
            type(event), ("unknown", event.event_type.lower())
        )
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        await self._write(event, entity_type, action)

    @sync_to_async
    def _write(self, event: DomainEvent, entity_type: str, action: str) -> None:
        from licenses.infrastructure.models import AuditLog

        AuditLog.objects.get_or_create(  # pylint: disable=no-member
            event_id=event.event_id,
            defaults={
                "entity_type": entity_type,
                "entity_id": event.aggregate_id,
                "action": action,
                "changes": event.payload(),
                "occurred_at": event.occurred_at,
            },
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    logger.info("Event handlers registered")
