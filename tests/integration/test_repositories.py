"""
Integration tests for repository implementations.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from billing.domain.invoice import Invoice
from billing.domain.invoice_number import InvoiceNumberGenerator
from billing.domain.transaction import Transaction
from billing.infrastructure.models import Invoice as InvoiceModel
from billing.infrastructure.models import Transaction as TransactionModel
from billing.infrastructure.repositories.django_invoice_repository import (
    DjangoInvoiceRepository,
)
from billing.infrastructure.repositories.django_sequence import DjangoSequence
from billing.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from core.domain.exceptions import (
    ConflictError,
    InvoiceNotFoundError,
    InvoiceNumberConflictError,
    LicenseKeyConflictError,
)
from core.domain.value_objects import LicenseStatus, TransactionStatus
from licenses.application.commands.dispatch_expiration_alerts import (
    DispatchExpirationAlertsCommand,
)
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.handlers.dispatch_alerts_handler import (
    DispatchExpirationAlertsHandler,
)
from licenses.application.handlers.license_lifecycle_handlers import RenewLicenseHandler
from licenses.domain.license import License
from licenses.infrastructure.models import AuditLog, LicenseAlert
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_alert_ledger import DjangoAlertLedger
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from notifications.infrastructure.alert_notifier import DjangoAlertNotifier
from notifications.infrastructure.models import Notification
from notifications.infrastructure.repositories.django_notification_repository import (
    DjangoNotificationRepository,
)
from subscriptions.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)
from tests.fakes import FailingNotifier


def issue(subscription, expiration_date, status=LicenseStatus.ACTIVE, key=None):
    license = License.issue(
        subscription_id=subscription.id,
        license_key=key or f"LIC-{uuid.uuid4().hex.upper()}-20240101",
        activation_date=min(date.today(), expiration_date),
        expiration_date=expiration_date,
        status=status,
    )
    return async_to_sync(DjangoLicenseRepository().add)(license)


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for DjangoLicenseRepository."""

    def test_add_and_find(self, subscription, client_account):
        """Test saving and finding a license."""
        saved = issue(subscription, date.today() + timedelta(days=30))

        found = async_to_sync(DjangoLicenseRepository().find_by_id)(saved.id)

        assert found is not None
        assert found.license_key == saved.license_key
        assert found.client_id == client_account[1].id

    def test_duplicate_key(self, subscription):
        """Test a taken key raises LicenseKeyConflictError."""
        issue(subscription, date.today() + timedelta(days=30), key="DUP-KEY")

        with pytest.raises(LicenseKeyConflictError):
            issue(subscription, date.today() + timedelta(days=30), key="DUP-KEY")

    def test_guarded_transition_conflict(self, subscription):
        """Test a transition from a stale status is rejected."""
        repository = DjangoLicenseRepository()
        license = issue(subscription, date.today() + timedelta(days=30))

        async_to_sync(repository.save_transition)(license.revoke(), LicenseStatus.ACTIVE)

        with pytest.raises(ConflictError):
            async_to_sync(repository.save_transition)(license.revoke(), LicenseStatus.ACTIVE)
        assert LicenseModel.objects.get(id=license.id).status == "revoked"

    def test_list_by_client(self, subscription, other_subscription, client_account):
        """Test listing is filtered through the subscription's client."""
        mine = issue(subscription, date.today() + timedelta(days=30))
        issue(other_subscription, date.today() + timedelta(days=30))

        licenses = async_to_sync(DjangoLicenseRepository().list)(
            client_id=client_account[1].id
        )

        assert [lic.id for lic in licenses] == [mine.id]

    def test_find_expiring_window(self, subscription):
        """Test the window includes today and the threshold day only."""
        today = date.today()
        on_today = issue(subscription, today)
        on_threshold = issue(subscription, today + timedelta(days=14))
        issue(subscription, today + timedelta(days=15))
        issue(subscription, today + timedelta(days=3), status=LicenseStatus.PENDING)

        alerts = async_to_sync(DjangoLicenseRepository().find_expiring)(today, 14)

        assert [alert.license_id for alert in alerts] == [on_today.id, on_threshold.id]
        assert [alert.expires_in for alert in alerts] == [0, 14]
        assert alerts[0].company_name == "Acme Ltd"

    def test_find_overdue(self, subscription):
        """Test overdue lookup returns active licenses past their date."""
        today = date.today()
        overdue = issue(subscription, today - timedelta(days=1))
        issue(subscription, today)

        found = async_to_sync(DjangoLicenseRepository().find_overdue)(today)

        assert [lic.id for lic in found] == [overdue.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestAlertDispatch:
    """Integration tests for the alert ledger and notifier."""

    def build_handler(self, notifier=None):
        return DispatchExpirationAlertsHandler(
            license_repository=DjangoLicenseRepository(),
            alert_ledger=DjangoAlertLedger(),
            notifier=notifier or DjangoAlertNotifier(DjangoNotificationRepository()),
        )

    def test_dispatch_is_idempotent_per_day(self, subscription, client_account, mailoutbox):
        """Test two runs on one day deliver and count a single alert."""
        license = issue(subscription, date.today() + timedelta(days=5))
        handler = self.build_handler()
        command = DispatchExpirationAlertsCommand(threshold_days=7)

        first = async_to_sync(handler.handle)(command)
        second = async_to_sync(handler.handle)(command)

        assert first.dispatched == [license.id]
        assert second.skipped == [license.id]
        stored = LicenseModel.objects.get(id=license.id)
        assert stored.notifications_sent == 1
        assert stored.last_checked == date.today()
        assert LicenseAlert.objects.filter(license_id=license.id, status="delivered").count() == 1
        assert Notification.objects.filter(user=client_account[0]).count() == 1
        assert len(mailoutbox) == 1
        assert AuditLog.objects.filter(
            entity_id=str(license.id), action="license_expiration_alerted"
        ).count() == 1

    def test_failed_delivery_releases_claim(self, subscription):
        """Test a failed delivery leaves no claim and no counter step."""
        license = issue(subscription, date.today() + timedelta(days=5))

        result = async_to_sync(self.build_handler(FailingNotifier()).handle)(
            DispatchExpirationAlertsCommand(threshold_days=7)
        )

        assert result.failed == [license.id]
        assert LicenseModel.objects.get(id=license.id).notifications_sent == 0
        assert not LicenseAlert.objects.filter(license_id=license.id).exists()

    def test_claim_is_exclusive(self, subscription):
        """Test the same alert can be claimed once."""
        license = issue(subscription, date.today() + timedelta(days=5))
        ledger = DjangoAlertLedger()

        cycle = license.expiration_date

        assert async_to_sync(ledger.claim)(license.id, cycle, 0) is True
        assert async_to_sync(ledger.claim)(license.id, cycle, 0) is False

    def test_complete_conflicts_on_stale_sequence(self, subscription):
        """Test completing an already counted alert raises ConflictError."""
        license = issue(subscription, date.today() + timedelta(days=5))
        ledger = DjangoAlertLedger()
        cycle = license.expiration_date
        async_to_sync(ledger.claim)(license.id, cycle, 0)
        async_to_sync(ledger.complete)(license.id, cycle, 0, date.today())

        with pytest.raises(ConflictError):
            async_to_sync(ledger.complete)(license.id, cycle, 0, date.today())
        assert LicenseModel.objects.get(id=license.id).notifications_sent == 1

    def test_renewed_license_alerts_again(self, subscription, mailoutbox):
        """Test a renewal starts a new alert cycle for the license."""
        license = issue(subscription, date.today() + timedelta(days=5))
        handler = self.build_handler()
        renew = RenewLicenseHandler(DjangoLicenseRepository(), DjangoSubscriptionRepository())

        first = async_to_sync(handler.handle)(DispatchExpirationAlertsCommand(threshold_days=7))
        renewed = async_to_sync(renew.handle)(RenewLicenseCommand(license_id=license.id))
        second = async_to_sync(handler.handle)(
            DispatchExpirationAlertsCommand(
                threshold_days=7, today=renewed.expiration_date - timedelta(days=3)
            )
        )

        assert first.dispatched == [license.id]
        assert renewed.notifications_sent == 0
        assert second.dispatched == [license.id]
        assert LicenseModel.objects.get(id=license.id).notifications_sent == 1
        assert LicenseAlert.objects.filter(license_id=license.id, status="delivered").count() == 2
        assert len(mailoutbox) == 2

    def test_stale_claim_is_taken_over(self, subscription):
        """Test a claim stranded before delivery does not block the alert forever."""
        license = issue(subscription, date.today() + timedelta(days=5))
        ledger = DjangoAlertLedger(stale_after=timedelta(minutes=15))
        cycle = license.expiration_date
        async_to_sync(ledger.claim)(license.id, cycle, 0)

        assert async_to_sync(ledger.claim)(license.id, cycle, 0) is False

        LicenseAlert.objects.filter(license_id=license.id).update(
            claimed_at=datetime.now(timezone.utc) - timedelta(hours=1)
        )
        result = async_to_sync(self.build_handler().handle)(
            DispatchExpirationAlertsCommand(threshold_days=7)
        )

        assert result.dispatched == [license.id]
        assert LicenseModel.objects.get(id=license.id).notifications_sent == 1
        assert LicenseAlert.objects.get(license_id=license.id).status == "delivered"


@pytest.mark.django_db
@pytest.mark.integration
class TestInvoiceRepository:
    """Integration tests for DjangoInvoiceRepository."""

    def make_invoice(self, client, issue_date=date(2024, 3, 1), number=None):
        return Invoice.create(
            client_id=client.id,
            amount=Decimal("100.00"),
            tax=Decimal("8.25"),
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=30),
            invoice_number=number,
        )

    def test_numbers_are_sequential(self, client_account):
        """Test invoices are numbered in order within a year."""
        repository = DjangoInvoiceRepository()
        numbers = InvoiceNumberGenerator(DjangoSequence())
        client = client_account[1]

        first = async_to_sync(repository.add)(self.make_invoice(client), numbers)
        second = async_to_sync(repository.add)(self.make_invoice(client), numbers)
        next_year = async_to_sync(repository.add)(
            self.make_invoice(client, issue_date=date(2025, 1, 2)), numbers
        )

        assert first.invoice_number == "INV-2024-00001"
        assert second.invoice_number == "INV-2024-00002"
        assert next_year.invoice_number == "INV-2025-00001"
        assert first.total_amount.amount == Decimal("108.25")

    def test_collision_with_supplied_number_retried(self, client_account):
        """Test a generated number taken by a manual invoice is skipped."""
        repository = DjangoInvoiceRepository()
        numbers = InvoiceNumberGenerator(DjangoSequence())
        client = client_account[1]
        async_to_sync(repository.add)(
            self.make_invoice(client, number="INV-2024-00001"), numbers
        )

        generated = async_to_sync(repository.add)(self.make_invoice(client), numbers)

        assert generated.invoice_number == "INV-2024-00002"

    def test_duplicate_supplied_number(self, client_account):
        """Test a duplicate supplied number is a conflict."""
        repository = DjangoInvoiceRepository()
        numbers = InvoiceNumberGenerator(DjangoSequence())
        client = client_account[1]
        async_to_sync(repository.add)(self.make_invoice(client, number="MANUAL-1"), numbers)

        with pytest.raises(InvoiceNumberConflictError):
            async_to_sync(repository.add)(self.make_invoice(client, number="MANUAL-1"), numbers)


@pytest.mark.django_db
@pytest.mark.integration
class TestTransactionRepository:
    """Integration tests for DjangoTransactionRepository."""

    def make_invoice(self, client):
        return InvoiceModel.objects.create(
            client=client,
            invoice_number=f"INV-T-{uuid.uuid4().hex[:6]}",
            amount=Decimal("50.00"),
            tax=Decimal("0.00"),
            total_amount=Decimal("50.00"),
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 7, 1),
        )

    def test_failed_transaction_marks_invoice_paid(self, client_account):
        """Test any recorded transaction flips the invoice to paid."""
        client = client_account[1]
        invoice = self.make_invoice(client)

        async_to_sync(DjangoTransactionRepository().record)(
            Transaction.create(
                client_id=client.id,
                amount="50.00",
                payment_method="card",
                status=TransactionStatus.FAILED,
                invoice_id=invoice.id,
            )
        )

        invoice.refresh_from_db()
        assert invoice.is_paid is True

    def test_missing_invoice_rolls_back(self, client_account):
        """Test nothing is stored when the invoice does not exist."""
        client = client_account[1]

        with pytest.raises(InvoiceNotFoundError):
            async_to_sync(DjangoTransactionRepository().record)(
                Transaction.create(
                    client_id=client.id,
                    amount="10.00",
                    payment_method="card",
                    invoice_id=uuid.uuid4(),
                )
            )

        assert not TransactionModel.objects.exists()

    def test_monthly_revenue_counts_completed_only(self, client_account):
        """Test revenue sums completed transactions inside the window."""
        client = client_account[1]
        repository = DjangoTransactionRepository()
        june = datetime(2024, 6, 15, tzinfo=timezone.utc)
        for status, amount, when in [
            (TransactionStatus.COMPLETED, "100.00", june),
            (TransactionStatus.COMPLETED, "20.50", june),
            (TransactionStatus.FAILED, "999.00", june),
            (TransactionStatus.COMPLETED, "7.00", datetime(2024, 5, 31, tzinfo=timezone.utc)),
        ]:
            async_to_sync(repository.record)(
                Transaction.create(
                    client_id=client.id,
                    amount=amount,
                    payment_method="card",
                    status=status,
                    transaction_date=when,
                )
            )

        total = async_to_sync(repository.sum_completed_between)(
            datetime(2024, 6, 1, tzinfo=timezone.utc),
            datetime(2024, 7, 1, tzinfo=timezone.utc),
        )

        assert total == Decimal("120.50")
