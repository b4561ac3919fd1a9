"""
Notification repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from notifications.domain.notification import Notification


class NotificationRepository(ABC):
    """Abstract repository for Notification entities."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Insert or update a notification."""

    @abstractmethod
    async def find_by_id(self, notification_id: uuid.UUID) -> Optional[Notification]:
        """Find a notification by ID."""

    @abstractmethod
    async def list_for_user(self, user_id: int) -> List[Notification]:
        """List a user's notifications, newest first."""

    @abstractmethod
    async def count_unread(self, user_id: int) -> int:
        """Count a user's unread notifications."""
