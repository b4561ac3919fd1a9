"""
Alert ledger port (interface).

Records which expiration alerts were produced so dispatch is
idempotent. A ledger key is (license_id, expiration_date, sequence):
expiration_date identifies the renewal cycle and sequence is the
license's notifications_sent value the alert was produced for.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import date

from licenses.domain.license import License


class AlertLedger(ABC):
    """Abstract ledger of expiration alerts."""

    @abstractmethod
    async def claim(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> bool:
        """
        Claim a ledger key before dispatching.

        A claim left undelivered for longer than the ledger's stale
        window may be taken over.

        Returns:
            False if the key was already delivered or is freshly claimed
        """

    @abstractmethod
    async def complete(
        self, license_id: uuid.UUID, expiration_date: date, sequence: int, today: date
    ) -> License:
        """
        Mark a claimed alert delivered.

        In one atomic step: mark the claim delivered, increment the
        license's notifications_sent by one and stamp last_checked.

        Raises:
            ConflictError: If the license was renewed or notifications_sent
                no longer equals sequence
        """

    @abstractmethod
    async def release(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> None:
        """Drop an undelivered claim so a retry can reuse the key."""
