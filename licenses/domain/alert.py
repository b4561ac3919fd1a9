"""
Expiration alert record.

A read model pairing an expiring license with the client it belongs to.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ExpiringLicense:
    """An active license close to its expiration date."""

    license_id: uuid.UUID
    license_key: str
    subscription_id: uuid.UUID
    client_id: uuid.UUID
    company_name: str
    contact_email: Optional[str]
    client_user_id: Optional[int]
    expiration_date: date
    expires_in: int
    notifications_sent: int
    last_checked: Optional[date]

    def to_dict(self) -> Dict[str, Any]:
        """Alert payload for notification templates and API responses."""
        return {
            "license_id": str(self.license_id),
            "license_key": self.license_key,
            "client_id": str(self.client_id),
            "company_name": self.company_name,
            "subscription_id": str(self.subscription_id),
            "expiration_date": self.expiration_date.isoformat(),
            "expires_in": self.expires_in,
        }
