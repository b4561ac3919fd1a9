"""
Ticket commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.actor import Actor
from core.domain.value_objects import TicketPriority, TicketStatus


@dataclass
class CreateTicketCommand:
    """
    Command to open a ticket.

    Client callers always open tickets for their own client.
    """

    actor: Actor
    title: str
    description: str = ""
    priority: TicketPriority = TicketPriority.MEDIUM
    client_id: Optional[uuid.UUID] = None


@dataclass
class UpdateTicketCommand:
    """
    Command to update a ticket. None fields are left unchanged.

    unassign clears the assignee.
    """

    actor: Actor
    ticket_id: uuid.UUID
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_to: Optional[uuid.UUID] = None
    unassign: bool = False
