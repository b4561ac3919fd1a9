"""
Billing domain events.
"""
import uuid
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class InvoiceCreated(DomainEvent):
    """Event raised when an invoice is created."""

    def __init__(self, invoice_id: uuid.UUID, invoice_number: str, client_id: uuid.UUID):
        super().__init__(aggregate_id=str(invoice_id))
        self.invoice_id = invoice_id
        self.invoice_number = invoice_number
        self.client_id = client_id

    def payload(self) -> Dict[str, Any]:
        return {
            "invoice_id": str(self.invoice_id),
            "invoice_number": self.invoice_number,
            "client_id": str(self.client_id),
        }


class TransactionRecorded(DomainEvent):
    """Event raised when a payment transaction is recorded."""

    def __init__(
        self,
        transaction_id: uuid.UUID,
        status: str,
        invoice_id: Optional[uuid.UUID] = None,
    ):
        super().__init__(aggregate_id=str(transaction_id))
        self.transaction_id = transaction_id
        self.status = status
        self.invoice_id = invoice_id

    def payload(self) -> Dict[str, Any]:
        return {
            "transaction_id": str(self.transaction_id),
            "status": self.status,
            "invoice_id": str(self.invoice_id) if self.invoice_id else None,
        }
