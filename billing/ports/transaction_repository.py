"""
Transaction repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from billing.domain.transaction import Transaction, TransactionSummary


class TransactionRepository(ABC):
    """Abstract repository for Transaction entities."""

    @abstractmethod
    async def record(self, transaction: Transaction) -> Transaction:
        """
        Insert a transaction.

        When the transaction references an invoice, the invoice is
        marked paid in the same database transaction as the insert.

        Raises:
            InvoiceNotFoundError: If the referenced invoice does not exist;
                nothing is written
        """

    @abstractmethod
    async def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """Find a transaction by ID."""

    @abstractmethod
    async def list(self, client_id: Optional[uuid.UUID] = None) -> List[Transaction]:
        """List transactions, newest first, optionally for one client."""

    @abstractmethod
    async def sum_completed_between(self, start: datetime, end: datetime) -> Decimal:
        """Sum completed transaction amounts dated in [start, end)."""

    @abstractmethod
    async def recent(self, limit: int = 5) -> List[TransactionSummary]:
        """Latest transactions with client company names."""
