"""
Subscription domain entity.

A subscription ties a client to a product for a billing period.
Licenses are issued under a subscription and renew by its period.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money, SubscriptionType


@dataclass(frozen=True)
class Subscription:
    """
    Subscription domain entity.

    Invariant: start_date < end_date.
    """

    id: uuid.UUID
    client_id: uuid.UUID
    product_id: uuid.UUID
    subscription_type: SubscriptionType
    start_date: date
    end_date: date
    price: Money
    auto_renew: bool
    notes: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate subscription entity."""
        if not self.client_id:
            raise ValidationError.for_field("client_id", "Client is required")
        if not self.product_id:
            raise ValidationError.for_field("product_id", "Product is required")
        if self.start_date >= self.end_date:
            raise ValidationError.for_field("end_date", "End date must be after start date")

    @classmethod
    def create(
        cls,
        client_id: uuid.UUID,
        product_id: uuid.UUID,
        subscription_type: SubscriptionType,
        start_date: date,
        end_date: Optional[date] = None,
        price: Decimal = Decimal("0"),
        auto_renew: bool = False,
        notes: str = "",
        subscription_id: Optional[uuid.UUID] = None,
    ) -> "Subscription":
        """
        Create a new Subscription entity.

        Args:
            client_id: Owning client UUID
            product_id: Subscribed product UUID
            subscription_type: Billing period
            start_date: First day of the subscription
            end_date: Last day (defaults to one billing period after start)
            price: Price per period
            auto_renew: Whether the subscription renews automatically
            notes: Free-form notes
            subscription_id: Optional UUID (generated if not provided)

        Returns:
            Subscription entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=subscription_id or uuid.uuid4(),
            client_id=client_id,
            product_id=product_id,
            subscription_type=subscription_type,
            start_date=start_date,
            end_date=end_date or subscription_type.advance(start_date),
            price=_money("price", price),
            auto_renew=auto_renew,
            notes=notes or "",
            created_at=now,
            updated_at=now,
        )

    def change_terms(
        self,
        end_date: Optional[date] = None,
        price: Optional[Decimal] = None,
        auto_renew: Optional[bool] = None,
        notes: Optional[str] = None,
        subscription_type: Optional[SubscriptionType] = None,
    ) -> "Subscription":
        """
        Create a new Subscription instance with updated terms.

        Fields left as None keep their current value. The start date,
        client and product are fixed once the subscription exists.
        """
        return replace(
            self,
            end_date=end_date if end_date is not None else self.end_date,
            price=_money("price", price) if price is not None else self.price,
            auto_renew=auto_renew if auto_renew is not None else self.auto_renew,
            notes=notes if notes is not None else self.notes,
            subscription_type=subscription_type or self.subscription_type,
            updated_at=datetime.now(timezone.utc),
        )


def _money(field: str, value) -> Money:
    try:
        return Money.of(value)
    except ValueError as exc:
        raise ValidationError.for_field(field, str(exc)) from exc
