"""
Billing API views.

Invoices and payment transactions.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain.access_policy import Operation
from api.v1.billing.serializers import (
    CreateInvoiceRequestSerializer,
    InvoiceSerializer,
    RecordTransactionRequestSerializer,
    TransactionSerializer,
)
from api.v1.common import authorize, uuid_param
from billing.application.commands.create_invoice import CreateInvoiceCommand
from billing.application.commands.record_transaction import RecordTransactionCommand
from billing.application.handlers.invoice_handlers import (
    CreateInvoiceHandler,
    GetInvoiceHandler,
    ListInvoicesHandler,
)
from billing.application.handlers.transaction_handlers import (
    GetTransactionHandler,
    ListTransactionsHandler,
    RecordTransactionHandler,
)
from billing.application.queries.billing_queries import (
    GetInvoiceQuery,
    GetTransactionQuery,
    ListInvoicesQuery,
    ListTransactionsQuery,
)
from billing.infrastructure.repositories.django_invoice_repository import (
    DjangoInvoiceRepository,
)
from billing.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from billing.infrastructure.wiring import build_number_generator
from clients.infrastructure.repositories.django_client_repository import DjangoClientRepository
from core.domain.value_objects import TransactionStatus
from core.instrumentation import get_tracer
from subscriptions.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)

_invoice_repo = DjangoInvoiceRepository()
_transaction_repo = DjangoTransactionRepository()
_client_repo = DjangoClientRepository()
_subscription_repo = DjangoSubscriptionRepository()

tracer = get_tracer(__name__)

_CLIENT_FILTER = OpenApiParameter(name="client_id", type=str, required=False)


class InvoiceListView(APIView):
    """List and create invoices."""

    @extend_schema(
        operation_id="list_invoices",
        summary="List Invoices",
        description="Client callers only see their own invoices.",
        tags=["Billing"],
        parameters=[_CLIENT_FILTER],
        responses={200: InvoiceSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_invoices"):
            actor = authorize(request, Operation.INVOICE_READ)
            invoices = await ListInvoicesHandler(_invoice_repo).handle(
                ListInvoicesQuery(actor=actor, client_id=uuid_param(request, "client_id"))
            )
            return Response(InvoiceSerializer(invoices, many=True).data)

    @extend_schema(
        operation_id="create_invoice",
        summary="Create Invoice",
        description=(
            "Create an invoice. The number is drawn from the yearly invoice "
            "sequence when omitted and the total is computed from amount and tax."
        ),
        tags=["Billing"],
        request=CreateInvoiceRequestSerializer,
        responses={
            201: InvoiceSerializer,
            400: {"description": "Validation error or mismatched total"},
            403: {"description": "Role not allowed"},
            404: {"description": "Client or subscription not found"},
            409: {"description": "Invoice number already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_invoice") as span:
            authorize(request, Operation.INVOICE_CREATE)
            serializer = CreateInvoiceRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("client_id", str(data["client_id"]))

            handler = CreateInvoiceHandler(
                invoice_repository=_invoice_repo,
                client_repository=_client_repo,
                subscription_repository=_subscription_repo,
                number_generator=build_number_generator(),
            )
            invoice = await handler.handle(
                CreateInvoiceCommand(
                    client_id=data["client_id"],
                    amount=data["amount"],
                    tax=data["tax"],
                    total_amount=data.get("total_amount"),
                    issue_date=data["issue_date"],
                    due_date=data["due_date"],
                    subscription_id=data.get("subscription_id"),
                    invoice_number=data.get("invoice_number") or None,
                    notes=data["notes"],
                )
            )
            span.set_attribute("invoice_number", invoice.invoice_number)
            return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class InvoiceDetailView(APIView):
    """Read one invoice."""

    @extend_schema(
        operation_id="get_invoice",
        summary="Get Invoice",
        tags=["Billing"],
        responses={
            200: InvoiceSerializer,
            403: {"description": "Not the caller's invoice"},
            404: {"description": "Invoice not found"},
        },
    )
    def get(self, request: Request, invoice_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, invoice_id)

    async def _handle_get(self, request: Request, invoice_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_invoice") as span:
            span.set_attribute("invoice_id", str(invoice_id))
            actor = authorize(request, Operation.INVOICE_READ)
            invoice = await GetInvoiceHandler(_invoice_repo).handle(
                GetInvoiceQuery(actor=actor, invoice_id=invoice_id)
            )
            return Response(InvoiceSerializer(invoice).data)


class TransactionListView(APIView):
    """List and record transactions."""

    @extend_schema(
        operation_id="list_transactions",
        summary="List Transactions",
        description="Client callers only see their own transactions.",
        tags=["Billing"],
        parameters=[_CLIENT_FILTER],
        responses={200: TransactionSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_transactions"):
            actor = authorize(request, Operation.TRANSACTION_READ)
            transactions = await ListTransactionsHandler(_transaction_repo).handle(
                ListTransactionsQuery(actor=actor, client_id=uuid_param(request, "client_id"))
            )
            return Response(TransactionSerializer(transactions, many=True).data)

    @extend_schema(
        operation_id="record_transaction",
        summary="Record Transaction",
        description=(
            "Record a payment. A referenced invoice is marked paid in the same "
            "database transaction, whatever the payment status."
        ),
        tags=["Billing"],
        request=RecordTransactionRequestSerializer,
        responses={
            201: TransactionSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Role not allowed"},
            404: {"description": "Client or invoice not found"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_record)(request)

    async def _handle_record(self, request: Request) -> Response:
        with tracer.start_as_current_span("record_transaction") as span:
            authorize(request, Operation.TRANSACTION_CREATE)
            serializer = RecordTransactionRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("transaction.status", data["status"])

            handler = RecordTransactionHandler(
                transaction_repository=_transaction_repo,
                client_repository=_client_repo,
                invoice_repository=_invoice_repo,
            )
            transaction = await handler.handle(
                RecordTransactionCommand(
                    client_id=data["client_id"],
                    amount=data["amount"],
                    payment_method=data["payment_method"],
                    status=TransactionStatus(data["status"]),
                    invoice_id=data.get("invoice_id"),
                    transaction_date=data.get("transaction_date"),
                    notes=data["notes"],
                )
            )
            return Response(
                TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED
            )


class TransactionDetailView(APIView):
    """Read one transaction."""

    @extend_schema(
        operation_id="get_transaction",
        summary="Get Transaction",
        tags=["Billing"],
        responses={
            200: TransactionSerializer,
            403: {"description": "Not the caller's transaction"},
            404: {"description": "Transaction not found"},
        },
    )
    def get(self, request: Request, transaction_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, transaction_id)

    async def _handle_get(self, request: Request, transaction_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_transaction") as span:
            span.set_attribute("transaction_id", str(transaction_id))
            actor = authorize(request, Operation.TRANSACTION_READ)
            transaction = await GetTransactionHandler(_transaction_repo).handle(
                GetTransactionQuery(actor=actor, transaction_id=transaction_id)
            )
            return Response(TransactionSerializer(transaction).data)
