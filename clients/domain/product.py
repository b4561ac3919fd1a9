"""
Product domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Money


@dataclass(frozen=True)
class Product:
    """Product that subscriptions are sold for."""

    id: uuid.UUID
    name: str
    description: str
    price: Money
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate product entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Product name too long")

    @classmethod
    def create(
        cls,
        name: str,
        price: Decimal,
        description: str = "",
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """Create a new Product entity."""
        now = datetime.now(timezone.utc)
        return cls(
            id=product_id or uuid.uuid4(),
            name=name.strip(),
            description=description,
            price=Money.of(price),
            created_at=now,
            updated_at=now,
        )
