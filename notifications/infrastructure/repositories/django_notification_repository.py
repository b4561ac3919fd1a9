"""
Django implementation of NotificationRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from notifications.domain.notification import Notification
from notifications.infrastructure.models import Notification as NotificationModel
from notifications.ports.notification_repository import NotificationRepository


class DjangoNotificationRepository(NotificationRepository):
    """Django ORM implementation of NotificationRepository."""

    def _to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            related_id=model.related_id,
            is_read=model.is_read,
            created_at=model.created_at,
        )

    @sync_to_async
    def save(self, notification: Notification) -> Notification:
        """Insert or update a notification."""
        # pylint: disable=no-member
        model, _ = NotificationModel.objects.update_or_create(
            id=notification.id,
            defaults={
                "user_id": notification.user_id,
                "title": notification.title,
                "message": notification.message,
                "type": notification.type,
                "related_id": notification.related_id,
                "is_read": notification.is_read,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, notification_id: uuid.UUID) -> Optional[Notification]:
        """Find a notification by ID."""
        try:
            # pylint: disable=no-member
            return self._to_domain(NotificationModel.objects.get(id=notification_id))
        except NotificationModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list_for_user(self, user_id: int) -> List[Notification]:
        """List a user's notifications, newest first."""
        queryset = NotificationModel.objects.filter(user_id=user_id)  # pylint: disable=no-member
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def count_unread(self, user_id: int) -> int:
        """Count a user's unread notifications."""
        # pylint: disable=no-member
        return NotificationModel.objects.filter(user_id=user_id, is_read=False).count()
