"""
Invoice repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from billing.domain.invoice import Invoice
from billing.domain.invoice_number import InvoiceNumberGenerator


class InvoiceRepository(ABC):
    """Abstract repository for Invoice entities."""

    @abstractmethod
    async def add(self, invoice: Invoice, numbers: InvoiceNumberGenerator) -> Invoice:
        """
        Insert a new invoice.

        An invoice without a number is numbered from the generator in
        the same database transaction as the insert; a colliding
        generated number is redrawn once.

        Raises:
            InvoiceNumberConflictError: On a duplicate supplied number
                or a second collision
        """

    @abstractmethod
    async def find_by_id(self, invoice_id: uuid.UUID) -> Optional[Invoice]:
        """
        Find an invoice by ID.

        Args:
            invoice_id: Invoice UUID

        Returns:
            Invoice entity or None if not found
        """

    @abstractmethod
    async def list(self, client_id: Optional[uuid.UUID] = None) -> List[Invoice]:
        """List invoices, optionally for one client."""
