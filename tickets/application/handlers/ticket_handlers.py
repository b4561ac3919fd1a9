"""
Ticket handlers.

Visibility follows the access policy: clients see their own tickets,
support sees tickets assigned to them or unassigned, admin and sales
see all.
"""
import logging
from typing import List

from accounts.domain.access_policy import AccessPolicy
from accounts.domain.actor import Actor
from accounts.ports.staff_repository import StaffRepository
from clients.ports.client_repository import ClientRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    ForbiddenError,
    StaffNotFoundError,
    TicketNotFoundError,
    ValidationError,
)
from tickets.application.commands.ticket_commands import CreateTicketCommand, UpdateTicketCommand
from tickets.application.queries.ticket_queries import GetTicketQuery, ListTicketsQuery
from tickets.domain.ticket import Ticket
from tickets.ports.ticket_repository import TicketRepository

logger = logging.getLogger(__name__)


async def load_visible_ticket(
    repository: TicketRepository,
    access_policy: AccessPolicy,
    actor: Actor,
    ticket_id,
) -> Ticket:
    """
    Load a ticket the actor may see.

    Raises:
        TicketNotFoundError: If missing (staff callers)
        ForbiddenError: If missing (client callers) or not visible
    """
    ticket = await repository.find_by_id(ticket_id)
    access_policy.ensure_readable(
        actor,
        ticket.client_id if ticket else None,
        TicketNotFoundError(f"Ticket {ticket_id} not found"),
    )
    if not access_policy.can_view_ticket(actor, ticket.client_id, ticket.assigned_to):
        raise ForbiddenError()
    return ticket


class CreateTicketHandler:
    """Handler for CreateTicketCommand."""

    def __init__(self, ticket_repository: TicketRepository, client_repository: ClientRepository):
        """Initialize handler with repositories."""
        self.ticket_repository = ticket_repository
        self.client_repository = client_repository

    async def handle(self, command: CreateTicketCommand) -> Ticket:
        """
        Handle create ticket command.

        Raises:
            ForbiddenError: If a client caller names another client
            ValidationError: If a staff caller omits the client
            ClientNotFoundError: If the client does not exist
        """
        actor = command.actor
        if actor.is_client:
            if actor.client_id is None:
                raise ForbiddenError("Client profile not found")
            if command.client_id is not None and command.client_id != actor.client_id:
                raise ForbiddenError()
            client_id = actor.client_id
        else:
            if command.client_id is None:
                raise ValidationError.for_field("client_id", "Client is required")
            client_id = command.client_id

        if not await self.client_repository.find_by_id(client_id):
            raise ClientNotFoundError(f"Client {client_id} not found")

        ticket = await self.ticket_repository.save(
            Ticket.create(
                client_id=client_id,
                title=command.title,
                description=command.description,
                priority=command.priority,
            )
        )
        logger.info("Ticket opened", extra={"ticket_id": str(ticket.id)})
        return ticket


class UpdateTicketHandler:
    """Handler for UpdateTicketCommand."""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        staff_repository: StaffRepository,
        access_policy: AccessPolicy = None,
    ):
        """Initialize handler with repositories and access policy."""
        self.ticket_repository = ticket_repository
        self.staff_repository = staff_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, command: UpdateTicketCommand) -> Ticket:
        """
        Handle update ticket command.

        Raises:
            TicketNotFoundError: If the ticket does not exist
            ForbiddenError: If the ticket is not visible to the caller
            StaffNotFoundError: If the assignee is unknown or inactive
            InvalidTransitionError: If the status is unchanged
        """
        ticket = await load_visible_ticket(
            self.ticket_repository, self.access_policy, command.actor, command.ticket_id
        )

        if command.unassign:
            ticket = ticket.assign(None)
        elif command.assigned_to is not None:
            if not await self.staff_repository.is_active(command.assigned_to):
                raise StaffNotFoundError(f"Staff member {command.assigned_to} not found")
            ticket = ticket.assign(command.assigned_to)
        if command.priority is not None:
            ticket = ticket.reprioritize(command.priority)
        if command.status is not None:
            ticket = ticket.change_status(command.status)

        return await self.ticket_repository.save(ticket)


class GetTicketHandler:
    """Handler for GetTicketQuery."""

    def __init__(self, ticket_repository: TicketRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.ticket_repository = ticket_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetTicketQuery) -> Ticket:
        """Handle get ticket query."""
        return await load_visible_ticket(
            self.ticket_repository, self.access_policy, query.actor, query.ticket_id
        )


class ListTicketsHandler:
    """Handler for ListTicketsQuery."""

    def __init__(self, ticket_repository: TicketRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.ticket_repository = ticket_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: ListTicketsQuery) -> List[Ticket]:
        """Handle list tickets query."""
        client_id = self.access_policy.scope_client(query.actor, query.client_id)
        tickets = await self.ticket_repository.list(client_id=client_id)
        return [
            ticket
            for ticket in tickets
            if self.access_policy.can_view_ticket(query.actor, ticket.client_id, ticket.assigned_to)
        ]
