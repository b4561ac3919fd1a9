"""
Expiration alert delivery.

Writes an in-app notification for the client's user and hands an email
to Django's mail backend.
"""
import logging

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import send_mail

from licenses.domain.alert import ExpiringLicense
from licenses.ports.alert_notifier import AlertNotifier
from notifications.domain.notification import LICENSE_EXPIRING, Notification
from notifications.ports.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


def alert_title(alert: ExpiringLicense) -> str:
    """Subject line for an expiration alert."""
    if alert.expires_in == 0:
        return f"License {alert.license_key} expires today"
    unit = "day" if alert.expires_in == 1 else "days"
    return f"License {alert.license_key} expires in {alert.expires_in} {unit}"


def alert_message(alert: ExpiringLicense) -> str:
    """Body text for an expiration alert."""
    return (
        f"Dear {alert.company_name},\n\n"
        f"Your license {alert.license_key} expires on "
        f"{alert.expiration_date:%Y-%m-%d}. Please contact us to renew it."
    )


class DjangoAlertNotifier(AlertNotifier):
    """AlertNotifier writing Notification rows and sending mail."""

    def __init__(self, notification_repository: NotificationRepository):
        """Initialize notifier with repository."""
        self.notification_repository = notification_repository

    async def notify(self, alert: ExpiringLicense) -> None:
        """
        Deliver an expiration alert.

        Raises:
            Exception: Mail backend or database failures propagate
        """
        title = alert_title(alert)
        message = alert_message(alert)

        if alert.client_user_id is not None:
            await self.notification_repository.save(
                Notification.create(
                    user_id=alert.client_user_id,
                    title=title,
                    message=message,
                    type=LICENSE_EXPIRING,
                    related_id=alert.license_id,
                )
            )

        if alert.contact_email:
            await sync_to_async(send_mail)(
                subject=title,
                message=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[alert.contact_email],
                fail_silently=False,
            )
        else:
            logger.info(
                "No contact email for expiration alert",
                extra={"license_id": str(alert.license_id), "client_id": str(alert.client_id)},
            )
