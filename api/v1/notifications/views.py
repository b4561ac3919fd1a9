"""
Notification API views.

Every endpoint works on the caller's own notifications.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain.access_policy import Operation
from api.v1.common import authorize
from api.v1.notifications.serializers import NotificationSerializer, UnreadCountSerializer
from core.instrumentation import get_tracer
from notifications.application.commands.mark_notification_read import (
    MarkNotificationReadCommand,
)
from notifications.application.handlers.notification_handlers import (
    ListNotificationsHandler,
    MarkNotificationReadHandler,
    UnreadCountHandler,
)
from notifications.application.queries.notification_queries import (
    ListNotificationsQuery,
    UnreadCountQuery,
)
from notifications.infrastructure.repositories.django_notification_repository import (
    DjangoNotificationRepository,
)

_notification_repo = DjangoNotificationRepository()

tracer = get_tracer(__name__)


class NotificationListView(APIView):
    """List the caller's notifications."""

    @extend_schema(
        operation_id="list_notifications",
        summary="List Notifications",
        tags=["Notifications"],
        responses={200: NotificationSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_notifications"):
            actor = authorize(request, Operation.NOTIFICATION_READ)
            notifications = await ListNotificationsHandler(_notification_repo).handle(
                ListNotificationsQuery(actor=actor)
            )
            return Response(NotificationSerializer(notifications, many=True).data)


class UnreadCountView(APIView):
    """Count the caller's unread notifications."""

    @extend_schema(
        operation_id="unread_notification_count",
        summary="Unread Notification Count",
        tags=["Notifications"],
        responses={200: UnreadCountSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_count)(request)

    async def _handle_count(self, request: Request) -> Response:
        with tracer.start_as_current_span("unread_notification_count"):
            actor = authorize(request, Operation.NOTIFICATION_READ)
            count = await UnreadCountHandler(_notification_repo).handle(
                UnreadCountQuery(actor=actor)
            )
            return Response({"unread_count": count})


class MarkNotificationReadView(APIView):
    """Mark one of the caller's notifications as read."""

    @extend_schema(
        operation_id="mark_notification_read",
        summary="Mark Notification Read",
        tags=["Notifications"],
        request=None,
        responses={
            200: NotificationSerializer,
            403: {"description": "Notification belongs to another user"},
            404: {"description": "Notification not found"},
        },
    )
    def post(self, request: Request, notification_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_mark_read)(request, notification_id)

    async def _handle_mark_read(self, request: Request, notification_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("mark_notification_read") as span:
            span.set_attribute("notification_id", str(notification_id))
            actor = authorize(request, Operation.NOTIFICATION_READ)
            notification = await MarkNotificationReadHandler(_notification_repo).handle(
                MarkNotificationReadCommand(actor=actor, notification_id=notification_id)
            )
            return Response(NotificationSerializer(notification).data)
