"""
Django implementation of AlertLedger port.

Ledger rows are unique on (license, expiration_date, sequence); claiming
an existing row fails on the constraint unless the row is a stale claim.
"""
import uuid
from datetime import date, timedelta

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from core.domain.exceptions import ConflictError
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseAlert
from licenses.infrastructure.repositories.django_license_repository import license_from_model
from licenses.ports.alert_ledger import AlertLedger


class DjangoAlertLedger(AlertLedger):
    """Django ORM implementation of AlertLedger."""

    def __init__(self, stale_after: timedelta = timedelta(minutes=15)):
        """Initialize ledger with the age after which a claim is stale."""
        self.stale_after = stale_after

    @sync_to_async
    def claim(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> bool:
        """Insert a claimed ledger row, or take over a stale claim."""
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                LicenseAlert.objects.create(
                    license_id=license_id, expiration_date=expiration_date, sequence=sequence
                )
        except IntegrityError:
            now = timezone.now()
            taken_over = LicenseAlert.objects.filter(  # pylint: disable=no-member
                license_id=license_id,
                expiration_date=expiration_date,
                sequence=sequence,
                status="claimed",
                claimed_at__lt=now - self.stale_after,
            ).update(claimed_at=now)
            return taken_over == 1
        return True

    @sync_to_async
    def complete(
        self, license_id: uuid.UUID, expiration_date: date, sequence: int, today: date
    ) -> License:
        """
        Mark the claim delivered and advance the license counter atomically.

        Raises:
            ConflictError: If the license was renewed or its counter moved past sequence
        """
        # pylint: disable=no-member
        with transaction.atomic():
            advanced = LicenseModel.objects.filter(
                id=license_id, expiration_date=expiration_date, notifications_sent=sequence
            ).update(
                notifications_sent=F("notifications_sent") + 1,
                last_checked=today,
                updated_at=timezone.now(),
            )
            if advanced == 0:
                raise ConflictError(
                    f"License {license_id} alert #{sequence} already recorded",
                    code="ALERT_CONFLICT",
                )
            LicenseAlert.objects.filter(
                license_id=license_id, expiration_date=expiration_date, sequence=sequence
            ).update(status="delivered", delivered_at=timezone.now())
        model = LicenseModel.objects.select_related("subscription").get(id=license_id)
        return license_from_model(model)

    @sync_to_async
    def release(self, license_id: uuid.UUID, expiration_date: date, sequence: int) -> None:
        """Delete an undelivered claim."""
        LicenseAlert.objects.filter(  # pylint: disable=no-member
            license_id=license_id,
            expiration_date=expiration_date,
            sequence=sequence,
            status="claimed",
        ).delete()
