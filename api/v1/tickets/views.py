"""
Ticket API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain.access_policy import Operation
from accounts.infrastructure.repositories.django_staff_repository import DjangoStaffRepository
from api.v1.common import authorize, uuid_param
from api.v1.tickets.serializers import (
    CreateTicketRequestSerializer,
    TicketSerializer,
    UpdateTicketRequestSerializer,
)
from clients.infrastructure.repositories.django_client_repository import DjangoClientRepository
from core.domain.value_objects import TicketPriority, TicketStatus
from core.instrumentation import get_tracer
from tickets.application.commands.ticket_commands import CreateTicketCommand, UpdateTicketCommand
from tickets.application.handlers.ticket_handlers import (
    CreateTicketHandler,
    GetTicketHandler,
    ListTicketsHandler,
    UpdateTicketHandler,
)
from tickets.application.queries.ticket_queries import GetTicketQuery, ListTicketsQuery
from tickets.infrastructure.repositories.django_ticket_repository import DjangoTicketRepository

_ticket_repo = DjangoTicketRepository()
_client_repo = DjangoClientRepository()
_staff_repo = DjangoStaffRepository()

tracer = get_tracer(__name__)


class TicketListView(APIView):
    """List and open tickets."""

    @extend_schema(
        operation_id="list_tickets",
        summary="List Tickets",
        description=(
            "Clients see their own tickets; support sees tickets assigned to "
            "them or unassigned; admin and sales see all."
        ),
        tags=["Tickets"],
        parameters=[OpenApiParameter(name="client_id", type=str, required=False)],
        responses={200: TicketSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_tickets"):
            actor = authorize(request, Operation.TICKET_READ)
            tickets = await ListTicketsHandler(_ticket_repo).handle(
                ListTicketsQuery(actor=actor, client_id=uuid_param(request, "client_id"))
            )
            return Response(TicketSerializer(tickets, many=True).data)

    @extend_schema(
        operation_id="create_ticket",
        summary="Open Ticket",
        tags=["Tickets"],
        request=CreateTicketRequestSerializer,
        responses={
            201: TicketSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Client caller named another client"},
            404: {"description": "Client not found"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_ticket") as span:
            actor = authorize(request, Operation.TICKET_CREATE)
            serializer = CreateTicketRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            ticket = await CreateTicketHandler(_ticket_repo, _client_repo).handle(
                CreateTicketCommand(
                    actor=actor,
                    title=data["title"],
                    description=data["description"],
                    priority=TicketPriority(data["priority"]),
                    client_id=data.get("client_id"),
                )
            )
            span.set_attribute("ticket_id", str(ticket.id))
            return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailView(APIView):
    """Read and update one ticket."""

    @extend_schema(
        operation_id="get_ticket",
        summary="Get Ticket",
        tags=["Tickets"],
        responses={
            200: TicketSerializer,
            403: {"description": "Ticket not visible to the caller"},
            404: {"description": "Ticket not found"},
        },
    )
    def get(self, request: Request, ticket_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, ticket_id)

    async def _handle_get(self, request: Request, ticket_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_ticket") as span:
            span.set_attribute("ticket_id", str(ticket_id))
            actor = authorize(request, Operation.TICKET_READ)
            ticket = await GetTicketHandler(_ticket_repo).handle(
                GetTicketQuery(actor=actor, ticket_id=ticket_id)
            )
            return Response(TicketSerializer(ticket).data)

    @extend_schema(
        operation_id="update_ticket",
        summary="Update Ticket",
        description="Change status, priority or assignee. Support and admin only.",
        tags=["Tickets"],
        request=UpdateTicketRequestSerializer,
        responses={
            200: TicketSerializer,
            400: {"description": "Validation error or unchanged status"},
            403: {"description": "Role not allowed or ticket not visible"},
            404: {"description": "Ticket or staff member not found"},
        },
    )
    def patch(self, request: Request, ticket_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, ticket_id)

    async def _handle_update(self, request: Request, ticket_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_ticket") as span:
            span.set_attribute("ticket_id", str(ticket_id))
            actor = authorize(request, Operation.TICKET_UPDATE)
            serializer = UpdateTicketRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            command = UpdateTicketCommand(
                actor=actor,
                ticket_id=ticket_id,
                status=TicketStatus(data["status"]) if "status" in data else None,
                priority=TicketPriority(data["priority"]) if "priority" in data else None,
                assigned_to=data.get("assigned_to"),
                unassign="assigned_to" in data and data["assigned_to"] is None,
            )
            ticket = await UpdateTicketHandler(_ticket_repo, _staff_repo).handle(command)
            return Response(TicketSerializer(ticket).data)
