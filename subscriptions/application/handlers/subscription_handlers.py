"""
Subscription handlers.

Handlers for creating, updating and reading subscriptions.
"""
import logging
from typing import List

from accounts.domain.access_policy import AccessPolicy
from clients.ports.client_repository import ClientRepository, ProductRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    ProductNotFoundError,
    SubscriptionNotFoundError,
)
from subscriptions.application.commands.create_subscription import (
    CreateSubscriptionCommand,
)
from subscriptions.application.commands.update_subscription import (
    UpdateSubscriptionCommand,
)
from subscriptions.application.queries.get_subscription import (
    GetSubscriptionQuery,
    ListSubscriptionsQuery,
)
from subscriptions.domain.subscription import Subscription
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class CreateSubscriptionHandler:
    """Handler for CreateSubscriptionCommand."""

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        client_repository: ClientRepository,
        product_repository: ProductRepository,
    ):
        """Initialize handler with repositories."""
        self.subscription_repository = subscription_repository
        self.client_repository = client_repository
        self.product_repository = product_repository

    async def handle(self, command: CreateSubscriptionCommand) -> Subscription:
        """
        Handle create subscription command.

        Raises:
            ClientNotFoundError: If the client does not exist
            ProductNotFoundError: If the product does not exist
            ValidationError: If the dates or price are invalid
        """
        if not await self.client_repository.find_by_id(command.client_id):
            raise ClientNotFoundError(f"Client {command.client_id} not found")
        if not await self.product_repository.find_by_id(command.product_id):
            raise ProductNotFoundError(f"Product {command.product_id} not found")

        subscription = Subscription.create(
            client_id=command.client_id,
            product_id=command.product_id,
            subscription_type=command.subscription_type,
            start_date=command.start_date,
            end_date=command.end_date,
            price=command.price,
            auto_renew=command.auto_renew,
            notes=command.notes,
        )
        saved = await self.subscription_repository.save(subscription)
        logger.info(
            "Subscription created",
            extra={"subscription_id": str(saved.id), "client_id": str(saved.client_id)},
        )
        return saved


class UpdateSubscriptionHandler:
    """Handler for UpdateSubscriptionCommand."""

    def __init__(self, subscription_repository: SubscriptionRepository):
        """Initialize handler with repository."""
        self.subscription_repository = subscription_repository

    async def handle(self, command: UpdateSubscriptionCommand) -> Subscription:
        """
        Handle update subscription command.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist
            ValidationError: If the new terms break the date invariant
        """
        subscription = await self.subscription_repository.find_by_id(command.subscription_id)
        if not subscription:
            raise SubscriptionNotFoundError(
                f"Subscription {command.subscription_id} not found"
            )

        updated = subscription.change_terms(
            end_date=command.end_date,
            price=command.price,
            auto_renew=command.auto_renew,
            notes=command.notes,
            subscription_type=command.subscription_type,
        )
        return await self.subscription_repository.save(updated)


class GetSubscriptionHandler:
    """Handler for GetSubscriptionQuery."""

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        access_policy: AccessPolicy = None,
    ):
        """Initialize handler with repository and access policy."""
        self.subscription_repository = subscription_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: GetSubscriptionQuery) -> Subscription:
        """
        Handle get subscription query.

        Raises:
            SubscriptionNotFoundError: If missing (staff callers)
            ForbiddenError: If missing or foreign (client callers)
        """
        subscription = await self.subscription_repository.find_by_id(query.subscription_id)
        self.access_policy.ensure_readable(
            query.actor,
            subscription.client_id if subscription else None,
            SubscriptionNotFoundError(f"Subscription {query.subscription_id} not found"),
        )
        return subscription


class ListSubscriptionsHandler:
    """Handler for ListSubscriptionsQuery."""

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        access_policy: AccessPolicy = None,
    ):
        """Initialize handler with repository and access policy."""
        self.subscription_repository = subscription_repository
        self.access_policy = access_policy or AccessPolicy()

    async def handle(self, query: ListSubscriptionsQuery) -> List[Subscription]:
        """Handle list subscriptions query."""
        client_id = self.access_policy.scope_client(query.actor, query.client_id)
        return await self.subscription_repository.list(client_id=client_id)
