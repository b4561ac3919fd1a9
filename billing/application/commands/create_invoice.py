"""
CreateInvoiceCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class CreateInvoiceCommand:
    """
    Command to create an invoice.

    invoice_number is generated when omitted; total_amount is computed
    when omitted and checked when supplied.
    """

    client_id: uuid.UUID
    amount: Decimal
    issue_date: date
    due_date: date
    tax: Decimal = Decimal("0")
    total_amount: Optional[Decimal] = None
    subscription_id: Optional[uuid.UUID] = None
    invoice_number: Optional[str] = None
    notes: str = ""
