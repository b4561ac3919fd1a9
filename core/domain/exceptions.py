"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__

    def details(self) -> Dict:
        """Extra payload rendered next to code and message."""
        return {}


class ValidationError(DomainException):
    """Raised when input fields are malformed or missing."""

    def __init__(
        self,
        message: str = "Invalid data",
        fields: Optional[Dict[str, List[str]]] = None,
    ):
        super().__init__(message, code="VALIDATION_ERROR")
        self.fields = fields or {}

    @classmethod
    def for_field(cls, field: str, error: str) -> "ValidationError":
        """Build a validation error for a single field."""
        return cls(error, fields={field: [error]})

    def details(self) -> Dict:
        return {"fields": self.fields} if self.fields else {}


class NotFoundError(DomainException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ClientNotFoundError(NotFoundError):
    """Raised when a client is not found."""

    def __init__(self, message: str = "Client not found"):
        super().__init__(message, code="CLIENT_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a subscription is not found."""

    def __init__(self, message: str = "Subscription not found"):
        super().__init__(message, code="SUBSCRIPTION_NOT_FOUND")


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class InvoiceNotFoundError(NotFoundError):
    """Raised when an invoice is not found."""

    def __init__(self, message: str = "Invoice not found"):
        super().__init__(message, code="INVOICE_NOT_FOUND")


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction is not found."""

    def __init__(self, message: str = "Transaction not found"):
        super().__init__(message, code="TRANSACTION_NOT_FOUND")


class TicketNotFoundError(NotFoundError):
    """Raised when a ticket is not found."""

    def __init__(self, message: str = "Ticket not found"):
        super().__init__(message, code="TICKET_NOT_FOUND")


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification is not found."""

    def __init__(self, message: str = "Notification not found"):
        super().__init__(message, code="NOTIFICATION_NOT_FOUND")


class StaffNotFoundError(NotFoundError):
    """Raised when a staff member is not found."""

    def __init__(self, message: str = "Staff member not found"):
        super().__init__(message, code="STAFF_NOT_FOUND")


class ForbiddenError(DomainException):
    """Raised when the caller's role or ownership check fails."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


class InvalidTransitionError(DomainException):
    """Raised when a state transition is not allowed from the current state."""

    def __init__(self, attempted: str, current: str, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot {attempted} from status '{current}'",
            code="INVALID_TRANSITION",
        )
        self.attempted = attempted
        self.current = current

    def details(self) -> Dict:
        return {"attempted": self.attempted, "current": self.current}


class ConflictError(DomainException):
    """Raised on a unique-key collision or a concurrent modification."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class LicenseKeyConflictError(ConflictError):
    """Raised when a license key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="LICENSE_KEY_CONFLICT")


class InvoiceNumberConflictError(ConflictError):
    """Raised when an invoice number already exists."""

    def __init__(self, message: str = "Invoice number already exists"):
        super().__init__(message, code="INVOICE_NUMBER_CONFLICT")
