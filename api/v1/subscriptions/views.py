"""
Subscription API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain.access_policy import Operation
from api.v1.common import authorize, uuid_param
from api.v1.subscriptions.serializers import (
    CreateSubscriptionRequestSerializer,
    SubscriptionSerializer,
    UpdateSubscriptionRequestSerializer,
)
from clients.infrastructure.repositories.django_client_repository import (
    DjangoClientRepository,
    DjangoProductRepository,
)
from core.domain.value_objects import SubscriptionType
from core.instrumentation import get_tracer
from subscriptions.application.commands.create_subscription import (
    CreateSubscriptionCommand,
)
from subscriptions.application.commands.update_subscription import (
    UpdateSubscriptionCommand,
)
from subscriptions.application.handlers.subscription_handlers import (
    CreateSubscriptionHandler,
    GetSubscriptionHandler,
    ListSubscriptionsHandler,
    UpdateSubscriptionHandler,
)
from subscriptions.application.queries.get_subscription import (
    GetSubscriptionQuery,
    ListSubscriptionsQuery,
)
from subscriptions.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)

_subscription_repo = DjangoSubscriptionRepository()
_client_repo = DjangoClientRepository()
_product_repo = DjangoProductRepository()

tracer = get_tracer(__name__)


class SubscriptionListView(APIView):
    """List and create subscriptions."""

    @extend_schema(
        operation_id="list_subscriptions",
        summary="List Subscriptions",
        description="Client callers only see their own subscriptions.",
        tags=["Subscriptions"],
        parameters=[
            OpenApiParameter(name="client_id", type=str, required=False),
        ],
        responses={200: SubscriptionSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_subscriptions"):
            actor = authorize(request, Operation.SUBSCRIPTION_READ)
            handler = ListSubscriptionsHandler(_subscription_repo)
            subscriptions = await handler.handle(
                ListSubscriptionsQuery(actor=actor, client_id=uuid_param(request, "client_id"))
            )
            return Response(SubscriptionSerializer(subscriptions, many=True).data)

    @extend_schema(
        operation_id="create_subscription",
        summary="Create Subscription",
        description=(
            "Subscribe a client to a product. The end date defaults to one "
            "billing period after the start date."
        ),
        tags=["Subscriptions"],
        request=CreateSubscriptionRequestSerializer,
        responses={
            201: SubscriptionSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Role not allowed"},
            404: {"description": "Client or product not found"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_subscription") as span:
            authorize(request, Operation.SUBSCRIPTION_CREATE)
            serializer = CreateSubscriptionRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("client_id", str(data["client_id"]))

            handler = CreateSubscriptionHandler(
                subscription_repository=_subscription_repo,
                client_repository=_client_repo,
                product_repository=_product_repo,
            )
            subscription = await handler.handle(
                CreateSubscriptionCommand(
                    client_id=data["client_id"],
                    product_id=data["product_id"],
                    subscription_type=SubscriptionType(data["subscription_type"]),
                    start_date=data["start_date"],
                    end_date=data.get("end_date"),
                    price=data["price"],
                    auto_renew=data["auto_renew"],
                    notes=data["notes"],
                )
            )
            span.set_attribute("subscription_id", str(subscription.id))
            return Response(
                SubscriptionSerializer(subscription).data, status=status.HTTP_201_CREATED
            )


class SubscriptionDetailView(APIView):
    """Read and update one subscription."""

    @extend_schema(
        operation_id="get_subscription",
        summary="Get Subscription",
        tags=["Subscriptions"],
        responses={
            200: SubscriptionSerializer,
            403: {"description": "Not the caller's subscription"},
            404: {"description": "Subscription not found"},
        },
    )
    def get(self, request: Request, subscription_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, subscription_id)

    async def _handle_get(self, request: Request, subscription_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_subscription") as span:
            span.set_attribute("subscription_id", str(subscription_id))
            actor = authorize(request, Operation.SUBSCRIPTION_READ)
            subscription = await GetSubscriptionHandler(_subscription_repo).handle(
                GetSubscriptionQuery(actor=actor, subscription_id=subscription_id)
            )
            return Response(SubscriptionSerializer(subscription).data)

    @extend_schema(
        operation_id="update_subscription",
        summary="Update Subscription",
        description="Change the type, end date, price, renewal flag or notes.",
        tags=["Subscriptions"],
        request=UpdateSubscriptionRequestSerializer,
        responses={
            200: SubscriptionSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Role not allowed"},
            404: {"description": "Subscription not found"},
        },
    )
    def patch(self, request: Request, subscription_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, subscription_id)

    async def _handle_update(self, request: Request, subscription_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_subscription") as span:
            span.set_attribute("subscription_id", str(subscription_id))
            authorize(request, Operation.SUBSCRIPTION_UPDATE)
            serializer = UpdateSubscriptionRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            subscription_type = data.get("subscription_type")
            subscription = await UpdateSubscriptionHandler(_subscription_repo).handle(
                UpdateSubscriptionCommand(
                    subscription_id=subscription_id,
                    subscription_type=(
                        SubscriptionType(subscription_type) if subscription_type else None
                    ),
                    end_date=data.get("end_date"),
                    price=data.get("price"),
                    auto_renew=data.get("auto_renew"),
                    notes=data.get("notes"),
                )
            )
            return Response(SubscriptionSerializer(subscription).data)
