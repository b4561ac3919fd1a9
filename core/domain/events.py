"""
Domain event base classes.

Events record license, invoice and payment changes after they are
persisted. Every event carries an id, so the audit log can store each
one exactly once.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses add their own attributes and expose them through
    payload(), which is what the audit log stores.
    """

    def __init__(self, aggregate_id: str, occurred_at: Optional[datetime] = None):
        """
        Initialize event metadata.

        Args:
            aggregate_id: Identifier of the aggregate the event belongs to
            occurred_at: When the event occurred (defaults to now)
        """
        self.event_id = uuid.uuid4()
        self.occurred_at = occurred_at or datetime.now(timezone.utc)
        self.aggregate_id = aggregate_id
        self.event_type = self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        """Event-specific attributes."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            **self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
