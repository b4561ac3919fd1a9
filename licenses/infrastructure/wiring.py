"""
Handler construction for entry points outside the API.

Celery tasks and management commands build their handlers here so
both run the same code as the HTTP endpoints.
"""
from datetime import timedelta

from django.conf import settings

from licenses.application.handlers.dispatch_alerts_handler import (
    DispatchExpirationAlertsHandler,
)
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.domain.license_key import DEFAULT_PREFIX
from licenses.infrastructure.repositories.django_alert_ledger import DjangoAlertLedger
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from notifications.infrastructure.alert_notifier import DjangoAlertNotifier
from notifications.infrastructure.repositories.django_notification_repository import (
    DjangoNotificationRepository,
)


def alert_threshold_days() -> int:
    """Configured expiration alert window in days."""
    return int(getattr(settings, "LICENSE_ALERT_THRESHOLD_DAYS", 14))


def alert_claim_timeout() -> timedelta:
    """Age after which an undelivered alert claim may be taken over."""
    return timedelta(minutes=int(getattr(settings, "LICENSE_ALERT_CLAIM_TIMEOUT_MINUTES", 15)))


def license_key_prefix() -> str:
    """Configured prefix for generated license keys."""
    return getattr(settings, "LICENSE_KEY_PREFIX", DEFAULT_PREFIX)


def build_expire_handler() -> ExpireLicensesHandler:
    """Expiry sweep handler backed by the ORM."""
    return ExpireLicensesHandler(license_repository=DjangoLicenseRepository())


def build_dispatch_handler() -> DispatchExpirationAlertsHandler:
    """Alert dispatch handler backed by the ORM and Django mail."""
    return DispatchExpirationAlertsHandler(
        license_repository=DjangoLicenseRepository(),
        alert_ledger=DjangoAlertLedger(stale_after=alert_claim_timeout()),
        notifier=DjangoAlertNotifier(DjangoNotificationRepository()),
    )
