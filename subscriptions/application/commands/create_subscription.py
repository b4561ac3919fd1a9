"""
CreateSubscriptionCommand.

Command to subscribe a client to a product.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import SubscriptionType


@dataclass
class CreateSubscriptionCommand:
    """Command to create a subscription."""

    client_id: uuid.UUID
    product_id: uuid.UUID
    subscription_type: SubscriptionType
    start_date: date
    price: Decimal
    end_date: Optional[date] = None
    auto_renew: bool = False
    notes: str = ""
