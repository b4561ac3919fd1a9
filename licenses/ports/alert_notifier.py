"""
Alert notifier port (interface).

Delivers an expiration alert to the client it concerns.
"""
from abc import ABC, abstractmethod

from licenses.domain.alert import ExpiringLicense


class AlertNotifier(ABC):
    """Abstract delivery channel for expiration alerts."""

    @abstractmethod
    async def notify(self, alert: ExpiringLicense) -> None:
        """
        Deliver an alert.

        Raises:
            Exception: Any delivery failure; the caller releases the claim
        """
