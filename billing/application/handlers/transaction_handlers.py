"""
Transaction handlers.
"""
import logging
from typing import List

from accounts.domain.access_policy import AccessPolicy
from billing.application.commands.record_transaction import RecordTransactionCommand
from billing.application.queries.billing_queries import (
    GetTransactionQuery,
    ListTransactionsQuery,
)
from billing.domain.events import TransactionRecorded
from billing.domain.transaction import Transaction
from billing.ports.invoice_repository import InvoiceRepository
from billing.ports.transaction_repository import TransactionRepository
from clients.ports.client_repository import ClientRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    InvoiceNotFoundError,
    TransactionNotFoundError,
    ValidationError,
)
from core.domain.value_objects import TransactionStatus
from core.infrastructure.events import event_bus
from core.metrics import transactions_recorded_total

logger = logging.getLogger(__name__)


class RecordTransactionHandler:
    """Handler for RecordTransactionCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        client_repository: ClientRepository,
        invoice_repository: InvoiceRepository,
    ):
        """Initialize handler with repositories."""
        self.transaction_repository = transaction_repository
        self.client_repository = client_repository
        self.invoice_repository = invoice_repository

    async def handle(self, command: RecordTransactionCommand) -> Transaction:
        """
        Handle record transaction command.

        A referenced invoice is marked paid regardless of the
        transaction status, failed included.

        Raises:
            ClientNotFoundError: If the client does not exist
            InvoiceNotFoundError: If the invoice does not exist
            ValidationError: If the invoice belongs to another client
        """
        if not await self.client_repository.find_by_id(command.client_id):
            raise ClientNotFoundError(f"Client {command.client_id} not found")

        if command.invoice_id:
            invoice = await self.invoice_repository.find_by_id(command.invoice_id)
            if not invoice:
                raise InvoiceNotFoundError(f"Invoice {command.invoice_id} not found")
            if invoice.client_id != command.client_id:
                raise ValidationError.for_field("invoice_id", "Invoice belongs to another client")

        transaction = Transaction.create(
            client_id=command.client_id,
            amount=command.amount,
            payment_method=command.payment_method,
            status=command.status,
            invoice_id=command.invoice_id,
            transaction_date=command.transaction_date,
            notes=command.notes,
        )
        saved = await self.transaction_repository.record(transaction)

        transactions_recorded_total.labels(status=saved.status.value).inc()
        if saved.invoice_id and saved.status is not TransactionStatus.COMPLETED:
            logger.warning(
                "Invoice marked paid by a %s transaction",
                saved.status.value,
                extra={"transaction_id": str(saved.id), "invoice_id": str(saved.invoice_id)},
            )
        else:
            logger.info("Transaction recorded", extra={"transaction_id": str(saved.id)})
        await event_bus.publish(
            TransactionRecorded(
                transaction_id=saved.id,
                status=saved.status.value,
                invoice_id=saved.invoice_id,
            )
        )
        return saved


class GetTransactionHandler:
    """Handler for GetTransactionQuery."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        access_policy: AccessPolicy = None,
    ):
        """Initialize handler with repository and access policy."""
        self.transaction_repository = transaction_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetTransactionQuery) -> Transaction:
        """
        Handle get transaction query.

        Raises:
            TransactionNotFoundError: If missing (staff callers)
            ForbiddenError: If missing or foreign (client callers)
        """
        transaction = await self.transaction_repository.find_by_id(query.transaction_id)
        self.access_policy.ensure_readable(
            query.actor,
            transaction.client_id if transaction else None,
            TransactionNotFoundError(f"Transaction {query.transaction_id} not found"),
        )
        return transaction


class ListTransactionsHandler:
    """Handler for ListTransactionsQuery."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        access_policy: AccessPolicy = None,
    ):
        """Initialize handler with repository and access policy."""
        self.transaction_repository = transaction_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: ListTransactionsQuery) -> List[Transaction]:
        """Handle list transactions query."""
        client_id = self.access_policy.scope_client(query.actor, query.client_id)
        return await self.transaction_repository.list(client_id=client_id)
