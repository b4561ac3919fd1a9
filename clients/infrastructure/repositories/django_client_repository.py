"""
Django implementations of ClientRepository and ProductRepository ports.

These adapters convert between domain entities and Django ORM models.
"""

import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from clients.domain.client import Client
from clients.domain.product import Product
from clients.infrastructure.models import Client as ClientModel
from clients.infrastructure.models import Product as ProductModel
from clients.ports.client_repository import ClientRepository, ProductRepository
from core.domain.value_objects import Money


class DjangoClientRepository(ClientRepository):
    """Django ORM implementation of ClientRepository."""

    def _to_domain(self, model: ClientModel) -> Client:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Client model

        Returns:
            Client domain entity
        """
        return Client(
            id=model.id,
            user_id=model.user_id,
            company_name=model.company_name,
            contact_email=model.contact_email or None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, client: Client) -> Client:
        """
        Save a client entity.

        Args:
            client: Client entity to save

        Returns:
            Saved client entity
        """
        # pylint: disable=no-member
        model, _ = ClientModel.objects.update_or_create(
            id=client.id,
            defaults={
                "user_id": client.user_id,
                "company_name": client.company_name,
                "contact_email": client.contact_email,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, client_id: uuid.UUID) -> Optional[Client]:
        """
        Find a client by ID.

        Args:
            client_id: Client UUID

        Returns:
            Client entity or None if not found
        """
        try:
            # pylint: disable=no-member
            return self._to_domain(ClientModel.objects.get(id=client_id))
        except ClientModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def count(self) -> int:
        """Count all clients."""
        return ClientModel.objects.count()  # pylint: disable=no-member


class DjangoProductRepository(ProductRepository):
    """Django ORM implementation of ProductRepository."""

    def _to_domain(self, model: ProductModel) -> Product:
        return Product(
            id=model.id,
            name=model.name,
            description=model.description,
            price=Money.of(model.price),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, product: Product) -> Product:
        """Save a product entity."""
        # pylint: disable=no-member
        model, _ = ProductModel.objects.update_or_create(
            id=product.id,
            defaults={
                "name": product.name,
                "description": product.description,
                "price": product.price.amount,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """Find a product by ID."""
        try:
            # pylint: disable=no-member
            return self._to_domain(ProductModel.objects.get(id=product_id))
        except ProductModel.DoesNotExist:  # pylint: disable=no-member
            return None
