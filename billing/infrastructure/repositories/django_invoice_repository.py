"""
Django implementation of InvoiceRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from billing.domain.invoice import Invoice
from billing.domain.invoice_number import InvoiceNumberGenerator
from billing.infrastructure.models import Invoice as InvoiceModel
from billing.ports.invoice_repository import InvoiceRepository
from core.domain.exceptions import InvoiceNumberConflictError
from core.domain.value_objects import Money

logger = logging.getLogger(__name__)


class DjangoInvoiceRepository(InvoiceRepository):
    """Django ORM implementation of InvoiceRepository."""

    MAX_ATTEMPTS = 2

    def _to_domain(self, model: InvoiceModel) -> Invoice:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Invoice model

        Returns:
            Invoice domain entity
        """
        return Invoice(
            id=model.id,
            client_id=model.client_id,
            subscription_id=model.subscription_id,
            invoice_number=model.invoice_number,
            amount=Money.of(model.amount),
            tax=Money.of(model.tax),
            total_amount=Money.of(model.total_amount),
            issue_date=model.issue_date,
            due_date=model.due_date,
            is_paid=model.is_paid,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _insert(self, invoice: Invoice) -> None:
        InvoiceModel.objects.create(  # pylint: disable=no-member
            id=invoice.id,
            client_id=invoice.client_id,
            subscription_id=invoice.subscription_id,
            invoice_number=invoice.invoice_number,
            amount=invoice.amount.amount,
            tax=invoice.tax.amount,
            total_amount=invoice.total_amount.amount,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            is_paid=invoice.is_paid,
            notes=invoice.notes,
        )

    @sync_to_async
    def add(self, invoice: Invoice, numbers: InvoiceNumberGenerator) -> Invoice:
        """
        Insert a new invoice, numbering it in the insert's transaction.

        Raises:
            InvoiceNumberConflictError: On a duplicate supplied number
                or a second collision
        """
        attempts = 1 if invoice.invoice_number else self.MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            candidate = invoice
            try:
                with transaction.atomic():
                    if not invoice.invoice_number:
                        candidate = invoice.numbered(numbers.next_number(invoice.issue_date))
                    self._insert(candidate)
            except IntegrityError as exc:
                taken = InvoiceModel.objects.filter(  # pylint: disable=no-member
                    invoice_number=candidate.invoice_number
                ).exists()
                if not taken:
                    raise
                if attempt == attempts:
                    raise InvoiceNumberConflictError(
                        f"Invoice number {candidate.invoice_number} already exists"
                    ) from exc
                logger.warning(
                    "Invoice number collided, drawing a new one",
                    extra={"invoice_number": candidate.invoice_number},
                )
                # Skip past the rolled-back draw.
                numbers.next_number(invoice.issue_date)
                continue
            return self._to_domain(InvoiceModel.objects.get(id=candidate.id))  # pylint: disable=no-member
        raise InvoiceNumberConflictError()

    @sync_to_async
    def find_by_id(self, invoice_id: uuid.UUID) -> Optional[Invoice]:
        """
        Find an invoice by ID.

        Args:
            invoice_id: Invoice UUID

        Returns:
            Invoice entity or None if not found
        """
        try:
            # pylint: disable=no-member
            return self._to_domain(InvoiceModel.objects.get(id=invoice_id))
        except InvoiceModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list(self, client_id: Optional[uuid.UUID] = None) -> List[Invoice]:
        """List invoices, newest first."""
        queryset = InvoiceModel.objects.all()  # pylint: disable=no-member
        if client_id is not None:
            queryset = queryset.filter(client_id=client_id)
        return [self._to_domain(model) for model in queryset]
