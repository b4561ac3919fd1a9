"""
Dashboard handlers.

Each statistic is computed on its own; a failure is logged and the
statistic reports zero while the others still compute.
"""
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Tuple

from accounts.domain.access_policy import AccessPolicy
from billing.domain.transaction import TransactionSummary
from billing.ports.transaction_repository import TransactionRepository
from clients.ports.client_repository import ClientRepository
from core.domain.value_objects import LicenseStatus, Role
from core.metrics import dashboard_stat_failures_total
from dashboard.application.dto.dashboard_dto import DashboardStatsDTO
from dashboard.application.queries.dashboard_queries import (
    GetDashboardStatsQuery,
    GetRecentTicketsQuery,
    GetRecentTransactionsQuery,
)
from licenses.ports.license_repository import LicenseRepository
from tickets.domain.ticket import TicketSummary
from tickets.ports.ticket_repository import TicketRepository

logger = logging.getLogger(__name__)


def month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """First instant of now's calendar month and of the month after."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class GetDashboardStatsHandler:
    """Handler for GetDashboardStatsQuery."""

    def __init__(
        self,
        client_repository: ClientRepository,
        license_repository: LicenseRepository,
        ticket_repository: TicketRepository,
        transaction_repository: TransactionRepository,
    ):
        """Initialize handler with repositories."""
        self.client_repository = client_repository
        self.license_repository = license_repository
        self.ticket_repository = ticket_repository
        self.transaction_repository = transaction_repository

    async def _compute(
        self, result: DashboardStatsDTO, name: str, compute: Callable[[], Awaitable]
    ) -> None:
        try:
            setattr(result, name, await compute())
        except Exception:  # pylint: disable=broad-except
            logger.exception("Dashboard statistic failed", extra={"stat": name})
            dashboard_stat_failures_total.labels(stat=name).inc()
            result.failed.append(name)

    async def handle(self, query: GetDashboardStatsQuery) -> DashboardStatsDTO:
        """
        Handle dashboard stats query.

        Monthly revenue sums completed transactions dated in the current
        calendar month.
        """
        now = query.now or datetime.now(timezone.utc)
        start, end = month_bounds(now)
        result = DashboardStatsDTO()

        await self._compute(result, "total_clients", self.client_repository.count)
        await self._compute(
            result,
            "active_licenses",
            lambda: self.license_repository.count_by_status(LicenseStatus.ACTIVE),
        )
        await self._compute(result, "open_tickets", self.ticket_repository.count_open)
        await self._compute(
            result,
            "monthly_revenue",
            lambda: self.transaction_repository.sum_completed_between(start, end),
        )
        return result


class GetRecentTransactionsHandler:
    """Handler for GetRecentTransactionsQuery."""

    def __init__(self, transaction_repository: TransactionRepository):
        """Initialize handler with repository."""
        self.transaction_repository = transaction_repository

    async def handle(self, query: GetRecentTransactionsQuery) -> List[TransactionSummary]:
        """Handle recent transactions query."""
        return await self.transaction_repository.recent(limit=query.limit)


class GetRecentTicketsHandler:
    """Handler for GetRecentTicketsQuery."""

    def __init__(self, ticket_repository: TicketRepository, access_policy: AccessPolicy = None):
        """Initialize handler with repository and access policy."""
        self.ticket_repository = ticket_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetRecentTicketsQuery) -> List[TicketSummary]:
        """
        Handle recent tickets query.

        Support callers only see unassigned tickets and their own.
        """
        actor = query.actor
        assigned_to_any = None
        if actor.role is Role.SUPPORT:
            assigned_to_any = [None] if actor.staff_id is None else [None, actor.staff_id]
        summaries = await self.ticket_repository.recent(
            limit=query.limit, assigned_to_any=assigned_to_any
        )
        return [
            summary
            for summary in summaries
            if self.access_policy.can_view_ticket(
                actor, summary.ticket.client_id, summary.ticket.assigned_to
            )
        ]
