"""
Transaction domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money, TransactionStatus


@dataclass(frozen=True)
class Transaction:
    """
    Payment transaction domain entity.

    Recording a transaction against an invoice marks the invoice paid
    whatever the transaction status.
    """

    id: uuid.UUID
    client_id: uuid.UUID
    invoice_id: Optional[uuid.UUID]
    amount: Money
    status: TransactionStatus
    payment_method: str
    transaction_date: datetime
    notes: str
    created_at: datetime

    def __post_init__(self):
        """Validate transaction entity."""
        if not self.client_id:
            raise ValidationError.for_field("client_id", "Client is required")
        if not self.payment_method or not self.payment_method.strip():
            raise ValidationError.for_field("payment_method", "Payment method is required")

    @classmethod
    def create(
        cls,
        client_id: uuid.UUID,
        amount: Decimal,
        payment_method: str,
        status: TransactionStatus = TransactionStatus.PENDING,
        invoice_id: Optional[uuid.UUID] = None,
        transaction_date: Optional[datetime] = None,
        notes: str = "",
        transaction_id: Optional[uuid.UUID] = None,
    ) -> "Transaction":
        """Create a new Transaction entity."""
        try:
            money = Money.of(amount)
        except ValueError as exc:
            raise ValidationError.for_field("amount", str(exc)) from exc
        now = datetime.now(timezone.utc)
        return cls(
            id=transaction_id or uuid.uuid4(),
            client_id=client_id,
            invoice_id=invoice_id,
            amount=money,
            status=status,
            payment_method=payment_method,
            transaction_date=transaction_date or now,
            notes=notes or "",
            created_at=now,
        )


@dataclass(frozen=True)
class TransactionSummary:
    """A transaction together with its client's company name."""

    transaction: Transaction
    company_name: str
