"""
Ticket queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.actor import Actor


@dataclass
class GetTicketQuery:
    """Query a single ticket on behalf of an actor."""

    actor: Actor
    ticket_id: uuid.UUID


@dataclass
class ListTicketsQuery:
    """List tickets visible to an actor."""

    actor: Actor
    client_id: Optional[uuid.UUID] = None
