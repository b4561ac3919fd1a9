"""
Ticket repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from tickets.domain.ticket import Ticket, TicketSummary


class TicketRepository(ABC):
    """Abstract repository for Ticket entities."""

    @abstractmethod
    async def save(self, ticket: Ticket) -> Ticket:
        """Insert or update a ticket."""

    @abstractmethod
    async def find_by_id(self, ticket_id: uuid.UUID) -> Optional[Ticket]:
        """Find a ticket by ID."""

    @abstractmethod
    async def list(self, client_id: Optional[uuid.UUID] = None) -> List[Ticket]:
        """List tickets, newest first, optionally for one client."""

    @abstractmethod
    async def recent(
        self,
        limit: int = 5,
        assigned_to_any: Optional[Iterable[Optional[uuid.UUID]]] = None,
    ) -> List[TicketSummary]:
        """
        Latest tickets with client and assignee names, newest first.

        assigned_to_any restricts the result to tickets whose assignee is
        one of the given staff IDs; None in it matches unassigned tickets.
        """

    @abstractmethod
    async def count_open(self) -> int:
        """Count tickets that are new or in progress."""
