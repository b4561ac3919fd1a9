"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseEvent(DomainEvent):
    """Base class for events about a single license."""

    def __init__(self, license_id: uuid.UUID, occurred_at=None):
        """
        Initialize license event.

        Args:
            license_id: License UUID
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id

    def payload(self) -> Dict[str, Any]:
        return {"license_id": str(self.license_id)}


class LicenseIssued(LicenseEvent):
    """Event raised when a license is issued."""

    def __init__(
        self,
        license_id: uuid.UUID,
        subscription_id: uuid.UUID,
        status: str,
        occurred_at=None,
    ):
        super().__init__(license_id, occurred_at)
        self.subscription_id = subscription_id
        self.status = status

    def payload(self) -> Dict[str, Any]:
        return {
            **super().payload(),
            "subscription_id": str(self.subscription_id),
            "status": self.status,
        }


class LicenseActivated(LicenseEvent):
    """Event raised when a pending license is activated."""


class LicenseRenewed(LicenseEvent):
    """Event raised when a license is renewed."""

    def __init__(self, license_id: uuid.UUID, new_expiration: date, occurred_at=None):
        super().__init__(license_id, occurred_at)
        self.new_expiration = new_expiration

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "new_expiration": self.new_expiration.isoformat()}


class LicenseRevoked(LicenseEvent):
    """Event raised when a license is revoked."""


class LicenseExpired(LicenseEvent):
    """Event raised when the expiry sweep expires a license."""


class LicenseExpirationAlerted(LicenseEvent):
    """Event raised when an expiration alert is delivered."""

    def __init__(
        self,
        license_id: uuid.UUID,
        sequence: int,
        expires_in: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, occurred_at)
        self.sequence = sequence
        self.expires_in = expires_in

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "sequence": self.sequence, "expires_in": self.expires_in}
