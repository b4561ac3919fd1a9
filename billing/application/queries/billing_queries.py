"""
Invoice and transaction queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.actor import Actor


@dataclass
class GetInvoiceQuery:
    """Query a single invoice on behalf of an actor."""

    actor: Actor
    invoice_id: uuid.UUID


@dataclass
class ListInvoicesQuery:
    """List invoices visible to an actor."""

    actor: Actor
    client_id: Optional[uuid.UUID] = None


@dataclass
class GetTransactionQuery:
    """Query a single transaction on behalf of an actor."""

    actor: Actor
    transaction_id: uuid.UUID


@dataclass
class ListTransactionsQuery:
    """List transactions visible to an actor."""

    actor: Actor
    client_id: Optional[uuid.UUID] = None
