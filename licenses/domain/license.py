"""
License domain entity.

This is the core domain entity representing a license issued under a
subscription. Every state change is an explicit transition that returns
a new instance; disallowed transitions raise InvalidTransitionError and
leave the original untouched.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidTransitionError, ValidationError
from core.domain.value_objects import LicenseStatus, SubscriptionType


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Invariants:
        activation_date <= expiration_date
        notifications_sent >= 0
        revoked is terminal
    """

    id: uuid.UUID
    subscription_id: uuid.UUID
    license_key: str
    status: LicenseStatus
    activation_date: date
    expiration_date: date
    last_checked: Optional[date]
    notifications_sent: int
    created_at: datetime
    updated_at: datetime
    client_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.subscription_id:
            raise ValidationError.for_field("subscription_id", "Subscription is required")
        if not self.license_key or not self.license_key.strip():
            raise ValidationError.for_field("license_key", "License key cannot be empty")
        if len(self.license_key) > 100:
            raise ValidationError.for_field("license_key", "License key too long")
        if self.activation_date > self.expiration_date:
            raise ValidationError.for_field(
                "expiration_date", "Expiration date cannot be before activation date"
            )
        if self.notifications_sent < 0:
            raise ValidationError.for_field(
                "notifications_sent", "Notification count cannot be negative"
            )

    @classmethod
    def issue(
        cls,
        subscription_id: uuid.UUID,
        license_key: str,
        expiration_date: date,
        activation_date: Optional[date] = None,
        status: LicenseStatus = LicenseStatus.ACTIVE,
        client_id: Optional[uuid.UUID] = None,
        license_id: Optional[uuid.UUID] = None,
        today: Optional[date] = None,
    ) -> "License":
        """
        Issue a new License entity.

        Args:
            subscription_id: Parent subscription UUID
            license_key: Unique license key
            expiration_date: Last valid day
            activation_date: First valid day (defaults to today)
            status: Initial status, active or pending
            client_id: Owning client, denormalized from the subscription
            license_id: Optional UUID (generated if not provided)
            today: Reference date (defaults to date.today())

        Returns:
            License entity instance
        """
        if status not in (LicenseStatus.ACTIVE, LicenseStatus.PENDING):
            raise InvalidTransitionError(
                "issue", "none", f"Cannot issue a license as '{status.value}'"
            )
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            subscription_id=subscription_id,
            license_key=license_key,
            status=status,
            activation_date=activation_date or today or date.today(),
            expiration_date=expiration_date,
            last_checked=None,
            notifications_sent=0,
            created_at=now,
            updated_at=now,
            client_id=client_id,
        )

    def days_until_expiration(self, today: Optional[date] = None) -> int:
        """Whole calendar days from today to the expiration date."""
        return (self.expiration_date - (today or date.today())).days

    def is_expiring(self, threshold_days: int, today: Optional[date] = None) -> bool:
        """
        Check if an active license expires within the threshold.

        Returns:
            True if active and 0 <= days_until_expiration <= threshold_days
        """
        if self.status != LicenseStatus.ACTIVE:
            return False
        return 0 <= self.days_until_expiration(today) <= threshold_days

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """Check if an active license is past its expiration date."""
        return self.status == LicenseStatus.ACTIVE and self.days_until_expiration(today) < 0

    def _require(self, attempted: str, *allowed: LicenseStatus) -> None:
        if self.status not in allowed:
            raise InvalidTransitionError(attempted, self.status.value)

    def _with(self, **changes) -> "License":
        return replace(self, updated_at=datetime.now(timezone.utc), **changes)

    def activate(self, today: Optional[date] = None) -> "License":
        """
        Create a new License instance activated today.

        Raises:
            InvalidTransitionError: If not pending or already past expiration
        """
        self._require("activate", LicenseStatus.PENDING)
        today = today or date.today()
        if self.expiration_date < today:
            raise InvalidTransitionError(
                "activate",
                self.status.value,
                "Cannot activate a license whose expiration date has passed",
            )
        return self._with(status=LicenseStatus.ACTIVE, activation_date=today)

    def revoke(self) -> "License":
        """
        Create a new License instance with revoked status.

        Raises:
            InvalidTransitionError: If not active
        """
        self._require("revoke", LicenseStatus.ACTIVE)
        return self._with(status=LicenseStatus.REVOKED)

    def expire(self, today: Optional[date] = None) -> "License":
        """
        Create a new License instance with expired status.

        Raises:
            InvalidTransitionError: If not active or not yet past expiration
        """
        self._require("expire", LicenseStatus.ACTIVE)
        if not self.is_overdue(today):
            raise InvalidTransitionError(
                "expire",
                self.status.value,
                "Cannot expire a license before its expiration date",
            )
        return self._with(status=LicenseStatus.EXPIRED)

    def renew(self, subscription_type: SubscriptionType) -> "License":
        """
        Create a new License instance extended by one billing period.

        Resets the expiration notification counter.

        Raises:
            InvalidTransitionError: If not active
        """
        self._require("renew", LicenseStatus.ACTIVE)
        return self._with(
            expiration_date=subscription_type.advance(self.expiration_date),
            notifications_sent=0,
        )

    def record_alert(self, today: Optional[date] = None) -> "License":
        """Create a new License instance after an expiration alert was delivered."""
        return self._with(
            notifications_sent=self.notifications_sent + 1,
            last_checked=today or date.today(),
        )

    def checked_on(self, today: Optional[date] = None) -> bool:
        """Check if the license was already processed for alerts on a day."""
        return self.last_checked is not None and self.last_checked == (today or date.today())
