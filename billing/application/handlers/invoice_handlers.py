"""
Invoice handlers.
"""
import logging
from typing import List

from accounts.domain.access_policy import AccessPolicy
from billing.application.commands.create_invoice import CreateInvoiceCommand
from billing.application.queries.billing_queries import GetInvoiceQuery, ListInvoicesQuery
from billing.domain.events import InvoiceCreated
from billing.domain.invoice import Invoice
from billing.domain.invoice_number import InvoiceNumberGenerator
from billing.ports.invoice_repository import InvoiceRepository
from clients.ports.client_repository import ClientRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    InvoiceNotFoundError,
    SubscriptionNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from core.metrics import invoices_created_total
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class CreateInvoiceHandler:
    """Handler for CreateInvoiceCommand."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        client_repository: ClientRepository,
        subscription_repository: SubscriptionRepository,
        number_generator: InvoiceNumberGenerator,
    ):
        """Initialize handler with repositories and the number generator."""
        self.invoice_repository = invoice_repository
        self.client_repository = client_repository
        self.subscription_repository = subscription_repository
        self.number_generator = number_generator

    async def handle(self, command: CreateInvoiceCommand) -> Invoice:
        """
        Handle create invoice command.

        Raises:
            ClientNotFoundError: If the client does not exist
            SubscriptionNotFoundError: If the subscription does not exist
            ValidationError: On a mismatched total, bad dates, or a
                subscription belonging to another client
            InvoiceNumberConflictError: On a duplicate invoice number
        """
        if not await self.client_repository.find_by_id(command.client_id):
            raise ClientNotFoundError(f"Client {command.client_id} not found")

        if command.subscription_id:
            subscription = await self.subscription_repository.find_by_id(command.subscription_id)
            if not subscription:
                raise SubscriptionNotFoundError(
                    f"Subscription {command.subscription_id} not found"
                )
            if subscription.client_id != command.client_id:
                raise ValidationError.for_field(
                    "subscription_id", "Subscription belongs to another client"
                )

        invoice = Invoice.create(
            client_id=command.client_id,
            amount=command.amount,
            tax=command.tax,
            total_amount=command.total_amount,
            issue_date=command.issue_date,
            due_date=command.due_date,
            subscription_id=command.subscription_id,
            invoice_number=command.invoice_number,
            notes=command.notes,
        )
        saved = await self.invoice_repository.add(invoice, self.number_generator)

        invoices_created_total.inc()
        logger.info(
            "Invoice created",
            extra={"invoice_id": str(saved.id), "invoice_number": saved.invoice_number},
        )
        await event_bus.publish(
            InvoiceCreated(
                invoice_id=saved.id,
                invoice_number=saved.invoice_number,
                client_id=saved.client_id,
            )
        )
        return saved


class GetInvoiceHandler:
    """Handler for GetInvoiceQuery."""

    def __init__(self, invoice_repository: InvoiceRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.invoice_repository = invoice_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetInvoiceQuery) -> Invoice:
        """
        Handle get invoice query.

        Raises:
            InvoiceNotFoundError: If missing (staff callers)
            ForbiddenError: If missing or foreign (client callers)
        """
        invoice = await self.invoice_repository.find_by_id(query.invoice_id)
        self.access_policy.ensure_readable(
            query.actor,
            invoice.client_id if invoice else None,
            InvoiceNotFoundError(f"Invoice {query.invoice_id} not found"),
        )
        return invoice


class ListInvoicesHandler:
    """Handler for ListInvoicesQuery."""

    def __init__(self, invoice_repository: InvoiceRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.invoice_repository = invoice_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: ListInvoicesQuery) -> List[Invoice]:
        """Handle list invoices query."""
        client_id = self.access_policy.scope_client(query.actor, query.client_id)
        return await self.invoice_repository.list(client_id=client_id)
