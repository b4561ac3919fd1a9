"""
Dashboard API views.

Read-only aggregates for staff.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain.access_policy import Operation
from api.v1.billing.serializers import TransactionSummarySerializer
from api.v1.common import authorize, int_param
from api.v1.dashboard.serializers import DashboardStatsSerializer, RecentTicketSerializer
from api.v1.licenses.serializers import ExpiringLicenseSerializer
from billing.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from clients.infrastructure.repositories.django_client_repository import DjangoClientRepository
from core.instrumentation import get_tracer
from dashboard.application.handlers.dashboard_handlers import (
    GetDashboardStatsHandler,
    GetRecentTicketsHandler,
    GetRecentTransactionsHandler,
)
from dashboard.application.queries.dashboard_queries import (
    GetDashboardStatsQuery,
    GetRecentTicketsQuery,
    GetRecentTransactionsQuery,
)
from licenses.application.handlers.license_query_handlers import GetExpiringLicensesHandler
from licenses.application.queries.get_expiring_licenses import GetExpiringLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.infrastructure.wiring import alert_threshold_days
from tickets.infrastructure.repositories.django_ticket_repository import DjangoTicketRepository

_client_repo = DjangoClientRepository()
_license_repo = DjangoLicenseRepository()
_ticket_repo = DjangoTicketRepository()
_transaction_repo = DjangoTransactionRepository()

tracer = get_tracer(__name__)


class DashboardStatsView(APIView):
    """Headline statistics."""

    @extend_schema(
        operation_id="dashboard_stats",
        summary="Dashboard Statistics",
        description=(
            "Total clients, active licenses, open tickets and revenue from "
            "completed transactions this month. A statistic that cannot be "
            "computed is reported as zero and listed in 'failed'."
        ),
        tags=["Dashboard"],
        responses={200: DashboardStatsSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_stats") as span:
            authorize(request, Operation.DASHBOARD_READ)
            handler = GetDashboardStatsHandler(
                client_repository=_client_repo,
                license_repository=_license_repo,
                ticket_repository=_ticket_repo,
                transaction_repository=_transaction_repo,
            )
            stats = await handler.handle(GetDashboardStatsQuery())
            if stats.failed:
                span.set_attribute("failed_stats", ",".join(stats.failed))
            return Response(DashboardStatsSerializer(stats).data)


class ExpiringLicensesView(APIView):
    """Active licenses close to expiry."""

    @extend_schema(
        operation_id="dashboard_expiring_licenses",
        summary="Expiring Licenses",
        description=(
            "Active licenses expiring within the given number of days. "
            "Read-only: notification counters are not touched."
        ),
        tags=["Dashboard"],
        parameters=[OpenApiParameter(name="days", type=int, required=False)],
        responses={200: ExpiringLicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_expiring)(request)

    async def _handle_expiring(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_expiring_licenses") as span:
            authorize(request, Operation.DASHBOARD_READ)
            days = int_param(request, "days", alert_threshold_days())
            span.set_attribute("threshold_days", days)
            alerts = await GetExpiringLicensesHandler(_license_repo).handle(
                GetExpiringLicensesQuery(threshold_days=days)
            )
            return Response(ExpiringLicenseSerializer(alerts, many=True).data)


class RecentTransactionsView(APIView):
    """Latest transactions across all clients."""

    @extend_schema(
        operation_id="dashboard_recent_transactions",
        summary="Recent Transactions",
        tags=["Dashboard"],
        responses={200: TransactionSummarySerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_recent)(request)

    async def _handle_recent(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_recent_transactions"):
            authorize(request, Operation.DASHBOARD_READ)
            transactions = await GetRecentTransactionsHandler(_transaction_repo).handle(
                GetRecentTransactionsQuery()
            )
            return Response(TransactionSummarySerializer(transactions, many=True).data)


class RecentTicketsView(APIView):
    """Latest tickets visible to the caller."""

    @extend_schema(
        operation_id="dashboard_recent_tickets",
        summary="Recent Tickets",
        description=(
            "The five newest tickets with client and assignee names. Support "
            "staff see unassigned tickets and their own."
        ),
        tags=["Dashboard"],
        responses={200: RecentTicketSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_recent)(request)

    async def _handle_recent(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_recent_tickets"):
            actor = authorize(request, Operation.DASHBOARD_READ)
            tickets = await GetRecentTicketsHandler(_ticket_repo).handle(
                GetRecentTicketsQuery(actor=actor)
            )
            return Response(RecentTicketSerializer(tickets, many=True).data)
