"""
License API views.

Endpoints for issuing licenses, driving their lifecycle transitions
and running the daily maintenance jobs on demand.
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
from api.v1.licenses.serializers import (
    AlertDispatchResultSerializer,
    DispatchAlertsRequestSerializer,
    ExpireLicensesRequestSerializer,
    ExpirySweepResultSerializer,
    IssueLicenseRequestSerializer,
    LicenseSerializer,
)
from core.domain.value_objects import LicenseStatus
from core.instrumentation import get_tracer
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.dispatch_expiration_alerts import (
    DispatchExpirationAlertsCommand,
)
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    ActivateLicenseHandler,
    RenewLicenseHandler,
    RevokeLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    ListLicensesHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery, ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.infrastructure.wiring import (
    alert_threshold_days,
    build_dispatch_handler,
    build_expire_handler,
    license_key_prefix,
)
from subscriptions.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)

_license_repo = DjangoLicenseRepository()
_subscription_repo = DjangoSubscriptionRepository()

tracer = get_tracer(__name__)


class LicenseListView(APIView):
    """List and issue licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Client callers only see licenses under their own subscriptions.",
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(name="subscription_id", type=str, required=False),
            OpenApiParameter(name="client_id", type=str, required=False),
        ],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses"):
            actor = authorize(request, Operation.LICENSE_READ)
            licenses = await ListLicensesHandler(_license_repo).handle(
                ListLicensesQuery(
                    actor=actor,
                    subscription_id=uuid_param(request, "subscription_id"),
                    client_id=uuid_param(request, "client_id"),
                )
            )
            return Response(LicenseSerializer(licenses, many=True).data)

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Issue a license under a subscription. A key is generated when none "
            "is supplied and the expiration date defaults to the subscription's end date."
        ),
        tags=["Licenses"],
        request=IssueLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Role not allowed"},
            404: {"description": "Subscription not found"},
            409: {"description": "License key already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_issue)(request)

    async def _handle_issue(self, request: Request) -> Response:
        with tracer.start_as_current_span("issue_license") as span:
            authorize(request, Operation.LICENSE_ISSUE)
            serializer = IssueLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("subscription_id", str(data["subscription_id"]))

            handler = IssueLicenseHandler(
                license_repository=_license_repo,
                subscription_repository=_subscription_repo,
                key_prefix=license_key_prefix(),
            )
            license = await handler.handle(
                IssueLicenseCommand(
                    subscription_id=data["subscription_id"],
                    license_key=data.get("license_key"),
                    status=LicenseStatus(data["status"]),
                    activation_date=data.get("activation_date"),
                    expiration_date=data.get("expiration_date"),
                )
            )
            span.set_attribute("license_id", str(license.id))
            return Response(LicenseSerializer(license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """Read one license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Licenses"],
        responses={
            200: LicenseSerializer,
            403: {"description": "Not the caller's license"},
            404: {"description": "License not found"},
        },
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, license_id)

    async def _handle_get(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license_id", str(license_id))
            actor = authorize(request, Operation.LICENSE_READ)
            license = await GetLicenseHandler(_license_repo).handle(
                GetLicenseQuery(actor=actor, license_id=license_id)
            )
            return Response(LicenseSerializer(license).data)


class LicenseTransitionView(APIView):
    """Base view for a single license state transition."""

    operation: Operation
    span_name = ""
    command_class = None

    def build_handler(self):
        raise NotImplementedError

    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_transition)(request, license_id)

    async def _handle_transition(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span(self.span_name) as span:
            span.set_attribute("license_id", str(license_id))
            authorize(request, self.operation)
            license = await self.build_handler().handle(self.command_class(license_id=license_id))
            span.set_attribute("license.status", license.status.value)
            return Response(LicenseSerializer(license).data)


_TRANSITION_RESPONSES = {
    200: LicenseSerializer,
    400: {"description": "Transition not allowed from the current status"},
    403: {"description": "Role not allowed"},
    404: {"description": "License not found"},
    409: {"description": "License changed concurrently"},
}


@extend_schema(
    operation_id="activate_license",
    summary="Activate License",
    description="Activate a pending license from today.",
    tags=["Licenses"],
    request=None,
    responses=_TRANSITION_RESPONSES,
)
class ActivateLicenseView(LicenseTransitionView):
    """Activate a pending license."""

    operation = Operation.LICENSE_ACTIVATE
    span_name = "activate_license"
    command_class = ActivateLicenseCommand

    def build_handler(self):
        return ActivateLicenseHandler(_license_repo)


@extend_schema(
    operation_id="revoke_license",
    summary="Revoke License",
    description="Revoke an active license. Revocation is permanent.",
    tags=["Licenses"],
    request=None,
    responses=_TRANSITION_RESPONSES,
)
class RevokeLicenseView(LicenseTransitionView):
    """Revoke an active license."""

    operation = Operation.LICENSE_REVOKE
    span_name = "revoke_license"
    command_class = RevokeLicenseCommand

    def build_handler(self):
        return RevokeLicenseHandler(_license_repo)


@extend_schema(
    operation_id="renew_license",
    summary="Renew License",
    description=(
        "Extend an active license by one billing period of its subscription "
        "and reset its expiration notification counter."
    ),
    tags=["Licenses"],
    request=None,
    responses=_TRANSITION_RESPONSES,
)
class RenewLicenseView(LicenseTransitionView):
    """Renew an active license."""

    operation = Operation.LICENSE_RENEW
    span_name = "renew_license"
    command_class = RenewLicenseCommand

    def build_handler(self):
        return RenewLicenseHandler(_license_repo, _subscription_repo)


class ExpireLicensesView(APIView):
    """Run the expiry sweep."""

    @extend_schema(
        operation_id="expire_licenses",
        summary="Expire Overdue Licenses",
        description="Expire every active license whose expiration date has passed.",
        tags=["Licenses"],
        request=ExpireLicensesRequestSerializer,
        responses={
            200: ExpirySweepResultSerializer,
            403: {"description": "Admin only"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_expire)(request)

    async def _handle_expire(self, request: Request) -> Response:
        with tracer.start_as_current_span("expire_licenses") as span:
            authorize(request, Operation.LICENSE_EXPIRE_SWEEP)
            serializer = ExpireLicensesRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            result = await build_expire_handler().handle(
                ExpireLicensesCommand(dry_run=serializer.validated_data["dry_run"])
            )
            span.set_attribute("expired_count", result.expired_count)
            return Response(ExpirySweepResultSerializer(result).data)


class DispatchAlertsView(APIView):
    """Run the expiration alert dispatch."""

    @extend_schema(
        operation_id="dispatch_license_alerts",
        summary="Dispatch Expiration Alerts",
        description=(
            "Notify clients about licenses expiring within the threshold. "
            "Licenses already processed today are skipped."
        ),
        tags=["Licenses"],
        request=DispatchAlertsRequestSerializer,
        responses={
            200: AlertDispatchResultSerializer,
            403: {"description": "Admin only"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_dispatch)(request)

    async def _handle_dispatch(self, request: Request) -> Response:
        with tracer.start_as_current_span("dispatch_license_alerts") as span:
            authorize(request, Operation.LICENSE_ALERT_DISPATCH)
            serializer = DispatchAlertsRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            days = serializer.validated_data.get("days")

            result = await build_dispatch_handler().handle(
                DispatchExpirationAlertsCommand(
                    threshold_days=days if days is not None else alert_threshold_days()
                )
            )
            span.set_attribute("dispatched", len(result.dispatched))
            span.set_attribute("failed", len(result.failed))
            return Response(AlertDispatchResultSerializer(result).data)
