"""
RecordTransactionCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import TransactionStatus


@dataclass
class RecordTransactionCommand:
    """Command to record a payment transaction."""

    client_id: uuid.UUID
    amount: Decimal
    payment_method: str
    status: TransactionStatus = TransactionStatus.PENDING
    invoice_id: Optional[uuid.UUID] = None
    transaction_date: Optional[datetime] = None
    notes: str = ""
