"""
Notification handlers.
"""
from typing import List

from core.domain.exceptions import ForbiddenError, NotificationNotFoundError
from notifications.application.commands.mark_notification_read import (
    MarkNotificationReadCommand,
)
from notifications.application.queries.notification_queries import (
    ListNotificationsQuery,
    UnreadCountQuery,
)
from notifications.domain.notification import Notification
from notifications.ports.notification_repository import NotificationRepository


class ListNotificationsHandler:
    """Handler for ListNotificationsQuery."""

    def __init__(self, notification_repository: NotificationRepository):
        """Initialize handler with repository."""
        self.notification_repository = notification_repository

    async def handle(self, query: ListNotificationsQuery) -> List[Notification]:
        """Handle list notifications query."""
        return await self.notification_repository.list_for_user(query.actor.user_id)


class UnreadCountHandler:
    """Handler for UnreadCountQuery."""

    def __init__(self, notification_repository: NotificationRepository):
        """Initialize handler with repository."""
        self.notification_repository = notification_repository

    async def handle(self, query: UnreadCountQuery) -> int:
        """Handle unread count query."""
        return await self.notification_repository.count_unread(query.actor.user_id)


class MarkNotificationReadHandler:
    """Handler for MarkNotificationReadCommand."""

    def __init__(self, notification_repository: NotificationRepository):
        """Initialize handler with repository."""
        self.notification_repository = notification_repository

    async def handle(self, command: MarkNotificationReadCommand) -> Notification:
        """
        Handle mark read command.

        Raises:
            NotificationNotFoundError: If the notification does not exist
            ForbiddenError: If it belongs to another user
        """
        notification = await self.notification_repository.find_by_id(command.notification_id)
        if not notification:
            raise NotificationNotFoundError(
                f"Notification {command.notification_id} not found"
            )
        if notification.user_id != command.actor.user_id:
            raise ForbiddenError()
        if notification.is_read:
            return notification
        return await self.notification_repository.save(notification.mark_read())
