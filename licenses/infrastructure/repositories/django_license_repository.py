"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import date, timedelta
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.domain.exceptions import ConflictError, LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus
from licenses.domain.alert import ExpiringLicense
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


def license_from_model(model: LicenseModel) -> License:
    """
    Convert Django model to domain entity.

    Args:
        model: Django License model (subscription loaded)

    Returns:
        License domain entity
    """
    return License(
        id=model.id,
        subscription_id=model.subscription_id,
        license_key=model.license_key,
        status=LicenseStatus(model.status),
        activation_date=model.activation_date,
        expiration_date=model.expiration_date,
        last_checked=model.last_checked,
        notifications_sent=model.notifications_sent,
        created_at=model.created_at,
        updated_at=model.updated_at,
        client_id=model.subscription.client_id,
    )


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Guards transitions with a conditional update on status
    3. Builds alert records for expiring licenses
    """

    def _queryset(self):
        # pylint: disable=no-member
        return LicenseModel.objects.select_related("subscription__client")

    def _to_domain(self, model: LicenseModel) -> License:
        return license_from_model(model)

    def _to_alert(self, model: LicenseModel, today: date) -> ExpiringLicense:
        client = model.subscription.client
        return ExpiringLicense(
            license_id=model.id,
            license_key=model.license_key,
            subscription_id=model.subscription_id,
            client_id=client.id,
            company_name=client.company_name,
            contact_email=client.contact_email or None,
            client_user_id=client.user_id,
            expiration_date=model.expiration_date,
            expires_in=(model.expiration_date - today).days,
            notifications_sent=model.notifications_sent,
            last_checked=model.last_checked,
        )

    @sync_to_async
    def add(self, license: License) -> License:
        """
        Insert a new license.

        Raises:
            LicenseKeyConflictError: If the license key already exists
        """
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                LicenseModel.objects.create(
                    id=license.id,
                    subscription_id=license.subscription_id,
                    license_key=license.license_key,
                    status=license.status.value,
                    activation_date=license.activation_date,
                    expiration_date=license.expiration_date,
                    last_checked=license.last_checked,
                    notifications_sent=license.notifications_sent,
                )
        except IntegrityError as exc:
            if self._queryset().filter(license_key=license.license_key).exists():
                raise LicenseKeyConflictError(
                    f"License key {license.license_key} already exists"
                ) from exc
            raise
        return self._to_domain(self._queryset().get(id=license.id))

    @sync_to_async
    def save_transition(self, license: License, expected_status: LicenseStatus) -> License:
        """
        Persist a transitioned license with a status-guarded update.

        Raises:
            ConflictError: If the stored status is no longer expected_status
        """
        # pylint: disable=no-member
        updated = LicenseModel.objects.filter(
            id=license.id, status=expected_status.value
        ).update(
            status=license.status.value,
            activation_date=license.activation_date,
            expiration_date=license.expiration_date,
            last_checked=license.last_checked,
            notifications_sent=license.notifications_sent,
            updated_at=timezone.now(),
        )
        if updated == 0:
            raise ConflictError(
                f"License {license.id} is no longer {expected_status.value}",
                code="LICENSE_STATE_CONFLICT",
            )
        return self._to_domain(self._queryset().get(id=license.id))

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            return self._to_domain(self._queryset().get(id=license_id))
        except LicenseModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list(
        self,
        subscription_id: Optional[uuid.UUID] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> List[License]:
        """List licenses, newest first."""
        queryset = self._queryset()
        if subscription_id is not None:
            queryset = queryset.filter(subscription_id=subscription_id)
        if client_id is not None:
            queryset = queryset.filter(subscription__client_id=client_id)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def find_expiring(self, today: date, threshold_days: int) -> List[ExpiringLicense]:
        """Find active licenses expiring between today and today + threshold_days."""
        queryset = self._queryset().filter(
            status=LicenseStatus.ACTIVE.value,
            expiration_date__gte=today,
            expiration_date__lte=today + timedelta(days=threshold_days),
        ).order_by("expiration_date")
        return [self._to_alert(model, today) for model in queryset]

    @sync_to_async
    def find_overdue(self, today: date) -> List[License]:
        """Find active licenses whose expiration date is before today."""
        queryset = self._queryset().filter(
            status=LicenseStatus.ACTIVE.value, expiration_date__lt=today
        )
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def count_by_status(self, status: LicenseStatus) -> int:
        """Count licenses in a status."""
        return LicenseModel.objects.filter(status=status.value).count()  # pylint: disable=no-member
