"""
Django implementation of TransactionRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction as db_transaction
from django.db.models import Sum
from django.utils import timezone

from billing.domain.transaction import Transaction, TransactionSummary
from billing.infrastructure.models import Invoice as InvoiceModel
from billing.infrastructure.models import Transaction as TransactionModel
from billing.ports.transaction_repository import TransactionRepository
from core.domain.exceptions import InvoiceNotFoundError
from core.domain.value_objects import Money, TransactionStatus


class DjangoTransactionRepository(TransactionRepository):
    """Django ORM implementation of TransactionRepository."""

    def _to_domain(self, model: TransactionModel) -> Transaction:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Transaction model

        Returns:
            Transaction domain entity
        """
        return Transaction(
            id=model.id,
            client_id=model.client_id,
            invoice_id=model.invoice_id,
            amount=Money.of(model.amount),
            status=TransactionStatus(model.status),
            payment_method=model.payment_method,
            transaction_date=model.transaction_date,
            notes=model.notes,
            created_at=model.created_at,
        )

    @sync_to_async
    def record(self, transaction: Transaction) -> Transaction:
        """
        Insert a transaction and mark its invoice paid atomically.

        Raises:
            InvoiceNotFoundError: If the referenced invoice does not exist
        """
        # pylint: disable=no-member
        with db_transaction.atomic():
            if transaction.invoice_id is not None:
                marked = InvoiceModel.objects.filter(id=transaction.invoice_id).update(
                    is_paid=True, updated_at=timezone.now()
                )
                if not marked:
                    raise InvoiceNotFoundError(f"Invoice {transaction.invoice_id} not found")
            model = TransactionModel.objects.create(
                id=transaction.id,
                client_id=transaction.client_id,
                invoice_id=transaction.invoice_id,
                amount=transaction.amount.amount,
                status=transaction.status.value,
                payment_method=transaction.payment_method,
                transaction_date=transaction.transaction_date,
                notes=transaction.notes,
            )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """Find a transaction by ID."""
        try:
            # pylint: disable=no-member
            return self._to_domain(TransactionModel.objects.get(id=transaction_id))
        except TransactionModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list(self, client_id: Optional[uuid.UUID] = None) -> List[Transaction]:
        """List transactions, newest first."""
        queryset = TransactionModel.objects.all()  # pylint: disable=no-member
        if client_id is not None:
            queryset = queryset.filter(client_id=client_id)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def sum_completed_between(self, start: datetime, end: datetime) -> Decimal:
        """Sum completed transaction amounts dated in [start, end)."""
        total = TransactionModel.objects.filter(  # pylint: disable=no-member
            status=TransactionStatus.COMPLETED.value,
            transaction_date__gte=start,
            transaction_date__lt=end,
        ).aggregate(total=Sum("amount"))["total"]
        return total or Decimal("0.00")

    @sync_to_async
    def recent(self, limit: int = 5) -> List[TransactionSummary]:
        """Latest transactions with client company names."""
        # pylint: disable=no-member
        queryset = TransactionModel.objects.select_related("client").order_by("-transaction_date")
        return [
            TransactionSummary(
                transaction=self._to_domain(model),
                company_name=model.client.company_name,
            )
            for model in queryset[:limit]
        ]
