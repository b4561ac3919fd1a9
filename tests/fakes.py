"""
In-memory port implementations for handler tests.
"""

import threading
import uuid
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Tuple

from billing.ports.sequence import InvoiceSequence
from core.domain.exceptions import ConflictError, LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus
from licenses.domain.alert import ExpiringLicense
from licenses.domain.license import License
from licenses.ports.alert_ledger import AlertLedger
from licenses.ports.alert_notifier import AlertNotifier
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository keeping licenses in a dict."""

    def __init__(self, licenses=()):
        self.licenses: Dict[uuid.UUID, License] = {lic.id: lic for lic in licenses}

    async def add(self, license: License) -> License:
        if any(lic.license_key == license.license_key for lic in self.licenses.values()):
            raise LicenseKeyConflictError()
        self.licenses[license.id] = license
        return license

    async def save_transition(self, license: License, expected_status: LicenseStatus) -> License:
        stored = self.licenses.get(license.id)
        if stored is None or stored.status != expected_status:
            raise ConflictError(f"License {license.id} changed concurrently")
        self.licenses[license.id] = license
        return license

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self.licenses.get(license_id)

    async def list(self, subscription_id=None, client_id=None) -> List[License]:
        return [
            lic
            for lic in self.licenses.values()
            if (subscription_id is None or lic.subscription_id == subscription_id)
            and (client_id is None or lic.client_id == client_id)
        ]

    async def find_expiring(self, today: date, threshold_days: int) -> List[ExpiringLicense]:
        expiring = [
            lic for lic in self.licenses.values() if lic.is_expiring(threshold_days, today)
        ]
        return [
            alert_for(lic, today)
            for lic in sorted(expiring, key=lambda lic: lic.expiration_date)
        ]

    async def find_overdue(self, today: date) -> List[License]:
        return [lic for lic in self.licenses.values() if lic.is_overdue(today)]

    async def count_by_status(self, status: LicenseStatus) -> int:
        return sum(1 for lic in self.licenses.values() if lic.status == status)


def alert_for(license: License, today: date) -> ExpiringLicense:
    """Alert record for a license owned by a fixed test company."""
    return ExpiringLicense(
        license_id=license.id,
        license_key=license.license_key,
        subscription_id=license.subscription_id,
        client_id=license.client_id or uuid.UUID(int=0),
        company_name="Acme Ltd",
        contact_email="billing@acme.test",
        client_user_id=None,
        expiration_date=license.expiration_date,
        expires_in=license.days_until_expiration(today),
        notifications_sent=license.notifications_sent,
        last_checked=license.last_checked,
    )


class InMemoryAlertLedger(AlertLedger):
    """AlertLedger advancing counters on an InMemoryLicenseRepository."""

    def __init__(self, repository: InMemoryLicenseRepository):
        self.repository = repository
        self.claims: Dict[Tuple[uuid.UUID, date, int], str] = {}

    async def claim(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> bool:
        key = (license_id, expiration_date, sequence)
        if key in self.claims:
            return False
        self.claims[key] = "claimed"
        return True

    async def complete(
        self, license_id: uuid.UUID, expiration_date: date, sequence: int, today: date
    ) -> License:
        license = self.repository.licenses[license_id]
        if license.expiration_date != expiration_date or license.notifications_sent != sequence:
            raise ConflictError(f"License {license_id} alert #{sequence} already recorded")
        updated = license.record_alert(today)
        self.repository.licenses[license_id] = updated
        self.claims[(license_id, expiration_date, sequence)] = "delivered"
        return updated

    async def release(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> None:
        key = (license_id, expiration_date, sequence)
        if self.claims.get(key) == "claimed":
            del self.claims[key]


class RecordingNotifier(AlertNotifier):
    """AlertNotifier remembering every delivered alert."""

    def __init__(self):
        self.delivered: List[ExpiringLicense] = []

    async def notify(self, alert: ExpiringLicense) -> None:
        self.delivered.append(alert)


class FailingNotifier(AlertNotifier):
    """AlertNotifier whose delivery channel is down."""

    def __init__(self):
        self.attempts = 0

    async def notify(self, alert: ExpiringLicense) -> None:
        self.attempts += 1
        raise RuntimeError("mail server unavailable")


class LockedSequence(InvoiceSequence):
    """Thread-safe in-memory named counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self._values = defaultdict(int)

    def next_value(self, name: str) -> int:
        with self._lock:
            self._values[name] += 1
            return self._values[name]
