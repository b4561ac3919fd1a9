"""
Django implementation of SubscriptionRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import Money, SubscriptionType
from subscriptions.domain.subscription import Subscription
from subscriptions.infrastructure.models import Subscription as SubscriptionModel
from subscriptions.ports.subscription_repository import SubscriptionRepository


class DjangoSubscriptionRepository(SubscriptionRepository):
    """Django ORM implementation of SubscriptionRepository."""

    def _to_domain(self, model: SubscriptionModel) -> Subscription:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Subscription model

        Returns:
            Subscription domain entity
        """
        return Subscription(
            id=model.id,
            client_id=model.client_id,
            product_id=model.product_id,
            subscription_type=SubscriptionType(model.subscription_type),
            start_date=model.start_date,
            end_date=model.end_date,
            price=Money.of(model.price),
            auto_renew=model.auto_renew,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, subscription: Subscription) -> Subscription:
        """
        Save a subscription entity.

        Args:
            subscription: Subscription entity to save

        Returns:
            Saved subscription entity
        """
        # pylint: disable=no-member
        model, _ = SubscriptionModel.objects.update_or_create(
            id=subscription.id,
            defaults={
                "client_id": subscription.client_id,
                "product_id": subscription.product_id,
                "subscription_type": subscription.subscription_type.value,
                "start_date": subscription.start_date,
                "end_date": subscription.end_date,
                "price": subscription.price.amount,
                "auto_renew": subscription.auto_renew,
                "notes": subscription.notes,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        """
        Find a subscription by ID.

        Args:
            subscription_id: Subscription UUID

        Returns:
            Subscription entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = SubscriptionModel.objects.get(id=subscription_id)
            return self._to_domain(model)
        except SubscriptionModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list(self, client_id: Optional[uuid.UUID] = None) -> List[Subscription]:
        """List subscriptions, newest first."""
        queryset = SubscriptionModel.objects.all()  # pylint: disable=no-member
        if client_id is not None:
            queryset = queryset.filter(client_id=client_id)
        return [self._to_domain(model) for model in queryset]
