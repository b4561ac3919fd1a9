"""
Subscription repository port (interface).

This defines the contract for subscription persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from subscriptions.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Abstract repository for Subscription entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, subscription: Subscription) -> Subscription:
        """
        Save a subscription entity.

        Args:
            subscription: Subscription entity to save

        Returns:
            Saved subscription entity
        """

    @abstractmethod
    async def find_by_id(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        """
        Find a subscription by ID.

        Args:
            subscription_id: Subscription UUID

        Returns:
            Subscription entity or None if not found
        """

    @abstractmethod
    async def list(self, client_id: Optional[uuid.UUID] = None) -> List[Subscription]:
        """
        List subscriptions, optionally restricted to one client.

        Args:
            client_id: Client UUID filter

        Returns:
            List of Subscription entities
        """
