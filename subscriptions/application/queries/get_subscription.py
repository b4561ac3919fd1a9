"""
Subscription queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.actor import Actor


@dataclass
class GetSubscriptionQuery:
    """Query a single subscription on behalf of an actor."""

    actor: Actor
    subscription_id: uuid.UUID


@dataclass
class ListSubscriptionsQuery:
    """List subscriptions visible to an actor, optionally for one client."""

    actor: Actor
    client_id: Optional[uuid.UUID] = None
