"""
Invoice domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money


@dataclass(frozen=True)
class Invoice:
    """
    Invoice domain entity.

    Invariants:
        total_amount == amount + tax
        issue_date <= due_date

    invoice_number is None until the invoice is numbered on insert.
    """

    id: uuid.UUID
    client_id: uuid.UUID
    subscription_id: Optional[uuid.UUID]
    invoice_number: Optional[str]
    amount: Money
    tax: Money
    total_amount: Money
    issue_date: date
    due_date: date
    is_paid: bool
    notes: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate invoice entity."""
        if not self.client_id:
            raise ValidationError.for_field("client_id", "Client is required")
        if self.issue_date > self.due_date:
            raise ValidationError.for_field("due_date", "Due date cannot be before issue date")
        if self.total_amount != self.amount + self.tax:
            raise ValidationError.for_field(
                "total_amount",
                f"Total amount {self.total_amount} does not equal amount plus tax "
                f"({self.amount + self.tax})",
            )

    @classmethod
    def create(
        cls,
        client_id: uuid.UUID,
        amount: Decimal,
        tax: Decimal,
        issue_date: date,
        due_date: date,
        total_amount: Optional[Decimal] = None,
        subscription_id: Optional[uuid.UUID] = None,
        invoice_number: Optional[str] = None,
        notes: str = "",
        invoice_id: Optional[uuid.UUID] = None,
    ) -> "Invoice":
        """
        Create a new Invoice entity.

        The total is computed from amount and tax when omitted; a
        supplied total must match it.

        Raises:
            ValidationError: On negative amounts, a mismatched total or bad dates
        """
        amount_money = _money("amount", amount)
        tax_money = _money("tax", tax)
        total = (
            _money("total_amount", total_amount)
            if total_amount is not None
            else amount_money + tax_money
        )
        now = datetime.now(timezone.utc)
        return cls(
            id=invoice_id or uuid.uuid4(),
            client_id=client_id,
            subscription_id=subscription_id,
            invoice_number=invoice_number or None,
            amount=amount_money,
            tax=tax_money,
            total_amount=total,
            issue_date=issue_date,
            due_date=due_date,
            is_paid=False,
            notes=notes or "",
            created_at=now,
            updated_at=now,
        )

    def numbered(self, invoice_number: str) -> "Invoice":
        """Create a new Invoice instance with an invoice number."""
        return replace(self, invoice_number=invoice_number)

    def mark_paid(self) -> "Invoice":
        """Create a new Invoice instance marked as paid."""
        return replace(self, is_paid=True, updated_at=datetime.now(timezone.utc))


def _money(field: str, value) -> Money:
    try:
        return Money.of(value)
    except ValueError as exc:
        raise ValidationError.for_field(field, str(exc)) from exc
