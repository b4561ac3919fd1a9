"""
Celery tasks for background processing.

Daily license maintenance: the expiry sweep and expiration alerts.
"""
import logging

from asgiref.sync import async_to_sync

from EntitlementService.celery import app
from licenses.application.commands.dispatch_expiration_alerts import (
    DispatchExpirationAlertsCommand,
)
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.infrastructure.wiring import (
    alert_threshold_days,
    build_dispatch_handler,
    build_expire_handler,
)

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def expire_licenses_task(self):
    """
    Expire every active license past its expiration date.

    Returns:
        Number of licenses expired
    """
    try:
        result = async_to_sync(build_expire_handler().handle)(ExpireLicensesCommand())
    except Exception as exc:
        logger.error("Expiry sweep failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2**self.request.retries)
    return result.expired_count


@app.task(bind=True, max_retries=3)
def dispatch_license_alerts_task(self, threshold_days=None):
    """
    Send expiration alerts for licenses close to expiry.

    Safe to retry: alerts already delivered today are skipped.

    Returns:
        Number of alerts dispatched
    """
    command = DispatchExpirationAlertsCommand(
        threshold_days=threshold_days if threshold_days is not None else alert_threshold_days()
    )
    try:
        result = async_to_sync(build_dispatch_handler().handle)(command)
    except Exception as exc:
        logger.error("Alert dispatch failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2**self.request.retries)
    return len(result.dispatched)
