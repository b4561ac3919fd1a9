"""
Notification domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import ValidationError

LICENSE_EXPIRING = "license_expiring"


@dataclass(frozen=True)
class Notification:
    """
    In-app notification for a user.

    related_id is a weak reference to the entity the notification is about.
    """

    id: uuid.UUID
    user_id: int
    title: str
    message: str
    type: str
    related_id: Optional[uuid.UUID]
    is_read: bool
    created_at: datetime

    def __post_init__(self):
        """Validate notification entity."""
        if not self.title or not self.title.strip():
            raise ValidationError.for_field("title", "Title cannot be empty")
        if len(self.title) > 255:
            raise ValidationError.for_field("title", "Title too long")

    @classmethod
    def create(
        cls,
        user_id: int,
        title: str,
        message: str,
        type: str = "info",  # pylint: disable=redefined-builtin
        related_id: Optional[uuid.UUID] = None,
    ) -> "Notification":
        """Create a new unread Notification entity."""
        return cls(
            id=uuid.uuid4(),
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            related_id=related_id,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )

    def mark_read(self) -> "Notification":
        """Create a new Notification instance marked as read."""
        return replace(self, is_read=True)
