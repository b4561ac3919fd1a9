"""
Client and Product repository ports (interfaces).

These define the contract for client persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from clients.domain.client import Client
from clients.domain.product import Product


class ClientRepository(ABC):
    """
    Abstract repository for Client entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, client: Client) -> Client:
        """
        Save a client entity.

        Args:
            client: Client entity to save

        Returns:
            Saved client entity
        """

    @abstractmethod
    async def find_by_id(self, client_id: uuid.UUID) -> Optional[Client]:
        """
        Find a client by ID.

        Args:
            client_id: Client UUID

        Returns:
            Client entity or None if not found
        """

    @abstractmethod
    async def count(self) -> int:
        """Count all clients."""


class ProductRepository(ABC):
    """Abstract repository for Product entities."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Save a product entity."""

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """Find a product by ID, None if not found."""
