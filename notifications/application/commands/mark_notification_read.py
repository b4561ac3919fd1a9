"""
MarkNotificationReadCommand.
"""
import uuid
from dataclasses import dataclass

from accounts.domain.actor import Actor


@dataclass
class MarkNotificationReadCommand:
    """Mark one of the caller's notifications as read."""

    actor: Actor
    notification_id: uuid.UUID
