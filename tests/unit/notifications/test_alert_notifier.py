"""
Unit tests for expiration alert delivery.
"""
import uuid
from datetime import date

import pytest

from licenses.domain.alert import ExpiringLicense
from notifications.domain.notification import LICENSE_EXPIRING
from notifications.infrastructure.alert_notifier import (
    DjangoAlertNotifier,
    alert_message,
    alert_title,
)
from notifications.ports.notification_repository import NotificationRepository


def make_alert(expires_in=5, contact_email="billing@acme.test", client_user_id=7):
    return ExpiringLicense(
        license_id=uuid.uuid4(),
        license_key="LIC-ABC-20240101",
        subscription_id=uuid.uuid4(),
        client_id=uuid.uuid4(),
        company_name="Acme Ltd",
        contact_email=contact_email,
        client_user_id=client_user_id,
        expiration_date=date(2024, 6, 6),
        expires_in=expires_in,
        notifications_sent=0,
        last_checked=None,
    )


class InMemoryNotificationRepository(NotificationRepository):
    def __init__(self):
        self.saved = []

    async def save(self, notification):
        self.saved.append(notification)
        return notification

    async def find_by_id(self, notification_id):
        return next((n for n in self.saved if n.id == notification_id), None)

    async def list_for_user(self, user_id):
        return [n for n in self.saved if n.user_id == user_id]

    async def count_unread(self, user_id):
        return sum(1 for n in self.saved if n.user_id == user_id and not n.is_read)


class TestAlertText:
    """Tests for alert wording."""

    @pytest.mark.parametrize(
        "expires_in,expected",
        [
            (0, "License LIC-ABC-20240101 expires today"),
            (1, "License LIC-ABC-20240101 expires in 1 day"),
            (5, "License LIC-ABC-20240101 expires in 5 days"),
        ],
    )
    def test_title(self, expires_in, expected):
        """Test the subject line reflects the days left."""
        assert alert_title(make_alert(expires_in=expires_in)) == expected

    def test_message(self):
        """Test the body names the company and expiration date."""
        message = alert_message(make_alert())
        assert "Acme Ltd" in message
        assert "2024-06-06" in message


@pytest.mark.asyncio
class TestDjangoAlertNotifier:
    """Tests for DjangoAlertNotifier."""

    async def test_notifies_user_and_mails_contact(self, mailoutbox):
        """Test an in-app notification and an email are produced."""
        repository = InMemoryNotificationRepository()
        alert = make_alert()

        await DjangoAlertNotifier(repository).notify(alert)

        assert len(repository.saved) == 1
        notification = repository.saved[0]
        assert notification.user_id == 7
        assert notification.type == LICENSE_EXPIRING
        assert notification.related_id == alert.license_id
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["billing@acme.test"]

    async def test_without_email_or_user(self, mailoutbox):
        """Test nothing is sent when the client has no user or contact email."""
        repository = InMemoryNotificationRepository()

        await DjangoAlertNotifier(repository).notify(
            make_alert(contact_email=None, client_user_id=None)
        )

        assert repository.saved == []
        assert mailoutbox == []
