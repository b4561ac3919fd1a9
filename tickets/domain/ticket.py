"""
Ticket domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidTransitionError, ValidationError
from core.domain.value_objects import TicketPriority, TicketStatus


@dataclass(frozen=True)
class Ticket:
    """
    Support ticket domain entity.

    closed_at is set exactly while the ticket is resolved or closed.
    """

    id: uuid.UUID
    client_id: uuid.UUID
    title: str
    description: str
    status: TicketStatus
    priority: TicketPriority
    assigned_to: Optional[uuid.UUID]
    closed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate ticket entity."""
        if not self.client_id:
            raise ValidationError.for_field("client_id", "Client is required")
        if not self.title or not self.title.strip():
            raise ValidationError.for_field("title", "Title cannot be empty")
        if len(self.title) > 255:
            raise ValidationError.for_field("title", "Title too long")

    @classmethod
    def create(
        cls,
        client_id: uuid.UUID,
        title: str,
        description: str,
        priority: TicketPriority = TicketPriority.MEDIUM,
        ticket_id: Optional[uuid.UUID] = None,
    ) -> "Ticket":
        """Create a new unassigned Ticket entity."""
        now = datetime.now(timezone.utc)
        return cls(
            id=ticket_id or uuid.uuid4(),
            client_id=client_id,
            title=title,
            description=description or "",
            status=TicketStatus.NEW,
            priority=priority,
            assigned_to=None,
            closed_at=None,
            created_at=now,
            updated_at=now,
        )

    def change_status(self, status: TicketStatus, now: Optional[datetime] = None) -> "Ticket":
        """
        Create a new Ticket instance in another status.

        Moving into resolved or closed stamps closed_at; reopening
        clears it.

        Raises:
            InvalidTransitionError: If the ticket is already in that status
        """
        if status == self.status:
            raise InvalidTransitionError(
                f"move to {status.value}",
                self.status.value,
                f"Ticket is already {status.value}",
            )
        now = now or datetime.now(timezone.utc)
        if status.is_open:
            closed_at = None
        else:
            closed_at = self.closed_at if not self.status.is_open else now
        return replace(self, status=status, closed_at=closed_at, updated_at=now)

    def assign(self, staff_id: Optional[uuid.UUID]) -> "Ticket":
        """Create a new Ticket instance assigned to a staff member (None unassigns)."""
        return replace(self, assigned_to=staff_id, updated_at=datetime.now(timezone.utc))

    def reprioritize(self, priority: TicketPriority) -> "Ticket":
        """Create a new Ticket instance with another priority."""
        return replace(self, priority=priority, updated_at=datetime.now(timezone.utc))


@dataclass(frozen=True)
class TicketSummary:
    """A ticket together with its client's company name and assignee's name."""

    ticket: Ticket
    company_name: str
    assignee_name: Optional[str]
