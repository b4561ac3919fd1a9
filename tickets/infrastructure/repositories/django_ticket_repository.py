"""
Django implementation of TicketRepository port.
"""
import uuid
from typing import Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Q

from core.domain.value_objects import TicketPriority, TicketStatus
from tickets.domain.ticket import Ticket, TicketSummary
from tickets.infrastructure.models import Ticket as TicketModel
from tickets.ports.ticket_repository import TicketRepository

OPEN_STATUSES = [status.value for status in TicketStatus if status.is_open]


class DjangoTicketRepository(TicketRepository):
    """Django ORM implementation of TicketRepository."""

    def _to_domain(self, model: TicketModel) -> Ticket:
        return Ticket(
            id=model.id,
            client_id=model.client_id,
            title=model.title,
            description=model.description,
            status=TicketStatus(model.status),
            priority=TicketPriority(model.priority),
            assigned_to=model.assigned_to_id,
            closed_at=model.closed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, ticket: Ticket) -> Ticket:
        """Insert or update a ticket."""
        # pylint: disable=no-member
        model, _ = TicketModel.objects.update_or_create(
            id=ticket.id,
            defaults={
                "client_id": ticket.client_id,
                "title": ticket.title,
                "description": ticket.description,
                "status": ticket.status.value,
                "priority": ticket.priority.value,
                "assigned_to_id": ticket.assigned_to,
                "closed_at": ticket.closed_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, ticket_id: uuid.UUID) -> Optional[Ticket]:
        """Find a ticket by ID."""
        try:
            # pylint: disable=no-member
            return self._to_domain(TicketModel.objects.get(id=ticket_id))
        except TicketModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list(self, client_id: Optional[uuid.UUID] = None) -> List[Ticket]:
        """List tickets, newest first."""
        queryset = TicketModel.objects.all()  # pylint: disable=no-member
        if client_id is not None:
            queryset = queryset.filter(client_id=client_id)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def count_open(self) -> int:
        """Count tickets that are new or in progress."""
        return TicketModel.objects.filter(status__in=OPEN_STATUSES).count()  # pylint: disable=no-member

    @sync_to_async
    def recent(
        self,
        limit: int = 5,
        assigned_to_any: Optional[Iterable[Optional[uuid.UUID]]] = None,
    ) -> List[TicketSummary]:
        """Latest tickets with client company and assignee names."""
        # pylint: disable=no-member
        queryset = TicketModel.objects.select_related("client", "assigned_to__user").order_by(
            "-created_at"
        )
        if assigned_to_any is not None:
            assignees = list(assigned_to_any)
            staff_ids = [staff_id for staff_id in assignees if staff_id is not None]
            condition = Q(assigned_to_id__in=staff_ids)
            if None in assignees:
                condition |= Q(assigned_to__isnull=True)
            queryset = queryset.filter(condition)
        return [
            TicketSummary(
                ticket=self._to_domain(model),
                company_name=model.client.company_name,
                assignee_name=(
                    model.assigned_to.user.get_full_name() or model.assigned_to.user.get_username()
                    if model.assigned_to
                    else None
                ),
            )
            for model in queryset[:limit]
        ]
