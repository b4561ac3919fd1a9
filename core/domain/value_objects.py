"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Union

from dateutil.relativedelta import relativedelta

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Money(ValueObject):
    """Non-negative amount rounded to cents."""

    amount: Decimal

    def __post_init__(self):
        """Normalize and validate the amount."""
        try:
            quantized = Decimal(self.amount).quantize(CENTS, rounding=ROUND_HALF_UP)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid amount: {self.amount}") from exc
        if quantized < 0:
            raise ValueError("Amount cannot be negative")
        object.__setattr__(self, "amount", quantized)

    @classmethod
    def of(cls, value: Union[Decimal, str, int, float, "Money"]) -> "Money":
        """Build Money from any numeric-like value."""
        if isinstance(value, Money):
            return value
        return cls(Decimal(str(value)))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __str__(self) -> str:
        return str(self.amount)


class Role(Enum):
    """User role value object."""

    ADMIN = "admin"
    SALES = "sales"
    SUPPORT = "support"
    CLIENT = "client"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value

    @property
    def is_staff(self) -> bool:
        """Roles operated by the vendor rather than a client."""
        return self is not Role.CLIENT


class SubscriptionType(Enum):
    """Billing period of a subscription."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    def __str__(self) -> str:
        return self.value

    @property
    def period(self) -> relativedelta:
        """Calendar length of one billing period."""
        return _BILLING_PERIODS[self]

    def advance(self, start: date) -> date:
        """
        Add one billing period to a date.

        Month arithmetic clamps to the end of the target month,
        so 2024-01-31 plus one month is 2024-02-29.
        """
        return start + self.period


_BILLING_PERIODS = {
    SubscriptionType.MONTHLY: relativedelta(months=1),
    SubscriptionType.QUARTERLY: relativedelta(months=3),
    SubscriptionType.YEARLY: relativedelta(years=1),
}


class LicenseStatus(Enum):
    """License status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class TransactionStatus(Enum):
    """Payment transaction status."""

    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class TicketStatus(Enum):
    """Support ticket status."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value

    @property
    def is_open(self) -> bool:
        return self in (TicketStatus.NEW, TicketStatus.IN_PROGRESS)


class TicketPriority(Enum):
    """Support ticket priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value
