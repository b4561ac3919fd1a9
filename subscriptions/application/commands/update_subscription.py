"""
UpdateSubscriptionCommand.

Command to change the terms of an existing subscription.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import SubscriptionType


@dataclass
class UpdateSubscriptionCommand:
    """Command to update a subscription. None fields are left unchanged."""

    subscription_id: uuid.UUID
    subscription_type: Optional[SubscriptionType] = None
    end_date: Optional[date] = None
    price: Optional[Decimal] = None
    auto_renew: Optional[bool] = None
    notes: Optional[str] = None
