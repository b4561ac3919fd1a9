"""
Client domain entity.

A client is the customer organisation that owns subscriptions,
invoices, transactions and tickets.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Client:
    """
    Client domain entity.

    Backed by exactly one user with the client role.
    """

    id: uuid.UUID
    user_id: int
    company_name: str
    contact_email: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate client entity."""
        if not self.company_name or len(self.company_name.strip()) == 0:
            raise ValueError("Company name cannot be empty")
        if self.user_id is None:
            raise ValueError("User ID is required")

    @classmethod
    def create(
        cls,
        user_id: int,
        company_name: str,
        contact_email: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> "Client":
        """Create a new Client entity."""
        now = datetime.now(timezone.utc)
        return cls(
            id=client_id or uuid.uuid4(),
            user_id=user_id,
            company_name=company_name.strip(),
            contact_email=contact_email,
            created_at=now,
            updated_at=now,
        )
