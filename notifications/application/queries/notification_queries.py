"""
Notification queries.
"""
from dataclasses import dataclass

from accounts.domain.actor import Actor


@dataclass
class ListNotificationsQuery:
    """The caller's own notifications."""

    actor: Actor


@dataclass
class UnreadCountQuery:
    """Number of the caller's unread notifications."""

    actor: Actor
