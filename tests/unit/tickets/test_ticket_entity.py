"""
Unit tests for Ticket domain entity.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import InvalidTransitionError, ValidationError
from core.domain.value_objects import TicketPriority, TicketStatus
from tickets.domain.ticket import Ticket

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def ticket():
    return Ticket.create(
        client_id=uuid.uuid4(),
        title="Cannot activate license",
        description="Activation fails with an error",
        priority=TicketPriority.HIGH,
    )


class TestTicketEntity:
    """Tests for Ticket domain entity."""

    def test_create_ticket(self, ticket):
        """Test a new ticket is open and unassigned."""
        assert ticket.status == TicketStatus.NEW
        assert ticket.assigned_to is None
        assert ticket.closed_at is None

    def test_blank_title_rejected(self):
        """Test the title is required."""
        with pytest.raises(ValidationError):
            Ticket.create(client_id=uuid.uuid4(), title=" ", description="")

    def test_resolving_stamps_closed_at(self, ticket):
        """Test moving to resolved records when the ticket closed."""
        resolved = ticket.change_status(TicketStatus.RESOLVED, now=NOW)

        assert resolved.status == TicketStatus.RESOLVED
        assert resolved.closed_at == NOW

    def test_resolved_to_closed_keeps_closed_at(self, ticket):
        """Test moving between final statuses keeps the first close time."""
        resolved = ticket.change_status(TicketStatus.RESOLVED, now=NOW)
        closed = resolved.change_status(TicketStatus.CLOSED, now=NOW + timedelta(days=1))

        assert closed.closed_at == NOW

    def test_reopen_clears_closed_at(self, ticket):
        """Test reopening clears the close time."""
        closed = ticket.change_status(TicketStatus.CLOSED, now=NOW)
        reopened = closed.change_status(TicketStatus.IN_PROGRESS, now=NOW)

        assert reopened.closed_at is None

    def test_same_status_rejected(self, ticket):
        """Test a no-op status change is an invalid transition."""
        with pytest.raises(InvalidTransitionError):
            ticket.change_status(TicketStatus.NEW)

    def test_assign_and_unassign(self, ticket):
        """Test assignment to a staff member and back."""
        staff_id = uuid.uuid4()
        assigned = ticket.assign(staff_id)

        assert assigned.assigned_to == staff_id
        assert assigned.assign(None).assigned_to is None

    def test_reprioritize(self, ticket):
        """Test changing the priority."""
        assert ticket.reprioritize(TicketPriority.LOW).priority == TicketPriority.LOW
