"""
Unit tests for License domain entity.
"""

import uuid
from datetime import date, timedelta

import pytest

from core.domain.exceptions import InvalidTransitionError, ValidationError
from core.domain.value_objects import LicenseStatus, SubscriptionType
from licenses.domain.license import License

TODAY = date(2024, 6, 1)


def make_license(status=LicenseStatus.ACTIVE, expiration_date=None, **kwargs):
    return License.issue(
        subscription_id=uuid.uuid4(),
        license_key=f"LIC-{uuid.uuid4().hex.upper()}-20240601",
        expiration_date=expiration_date or TODAY + timedelta(days=30),
        activation_date=kwargs.pop("activation_date", TODAY - timedelta(days=335)),
        status=status,
        today=TODAY,
        **kwargs,
    )


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_issue_license(self):
        """Test issuing a license entity."""
        subscription_id = uuid.uuid4()
        license = License.issue(
            subscription_id=subscription_id,
            license_key="LIC-TEST",
            expiration_date=TODAY + timedelta(days=365),
            today=TODAY,
        )

        assert license.subscription_id == subscription_id
        assert license.status == LicenseStatus.ACTIVE
        assert license.activation_date == TODAY
        assert license.notifications_sent == 0
        assert license.last_checked is None

    def test_issue_pending_license(self):
        """Test a license can start out pending."""
        license = make_license(status=LicenseStatus.PENDING)
        assert license.status == LicenseStatus.PENDING

    @pytest.mark.parametrize("status", [LicenseStatus.EXPIRED, LicenseStatus.REVOKED])
    def test_issue_in_final_status_rejected(self, status):
        """Test a license cannot be born expired or revoked."""
        with pytest.raises(InvalidTransitionError):
            make_license(status=status)

    def test_expiration_before_activation_rejected(self):
        """Test the activation date cannot be after the expiration date."""
        with pytest.raises(ValidationError) as exc_info:
            make_license(activation_date=TODAY, expiration_date=TODAY - timedelta(days=1))
        assert "expiration_date" in exc_info.value.fields

    def test_empty_key_rejected(self):
        """Test a blank license key is rejected."""
        with pytest.raises(ValidationError):
            License.issue(
                subscription_id=uuid.uuid4(),
                license_key="  ",
                expiration_date=TODAY,
                today=TODAY,
            )

    def test_is_immutable(self):
        """Test that license entity is immutable."""
        license = make_license()
        with pytest.raises(AttributeError):
            license.status = LicenseStatus.REVOKED  # type: ignore


class TestLicenseTransitions:
    """Tests for License state transitions."""

    def test_activate_pending(self):
        """Test activating a pending license stamps today's date."""
        license = make_license(status=LicenseStatus.PENDING)
        activated = license.activate(TODAY)

        assert activated.status == LicenseStatus.ACTIVE
        assert activated.activation_date == TODAY
        assert license.status == LicenseStatus.PENDING

    def test_activate_active_rejected(self):
        """Test activating an active license fails."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            make_license().activate(TODAY)
        assert exc_info.value.attempted == "activate"
        assert exc_info.value.current == "active"

    def test_activate_past_expiration_rejected(self):
        """Test a pending license past its expiration cannot be activated."""
        license = make_license(
            status=LicenseStatus.PENDING,
            activation_date=TODAY - timedelta(days=60),
            expiration_date=TODAY - timedelta(days=1),
        )
        with pytest.raises(InvalidTransitionError):
            license.activate(TODAY)

    def test_revoke_active(self):
        """Test revoking an active license."""
        assert make_license().revoke().status == LicenseStatus.REVOKED

    def test_revoked_is_terminal(self):
        """Test no transition leaves the revoked status."""
        revoked = make_license().revoke()

        with pytest.raises(InvalidTransitionError):
            revoked.activate(TODAY)
        with pytest.raises(InvalidTransitionError):
            revoked.revoke()
        with pytest.raises(InvalidTransitionError):
            revoked.renew(SubscriptionType.MONTHLY)
        with pytest.raises(InvalidTransitionError):
            revoked.expire(TODAY + timedelta(days=400))

    def test_expire_overdue(self):
        """Test an active license past its expiration expires."""
        license = make_license(expiration_date=TODAY - timedelta(days=1))
        assert license.expire(TODAY).status == LicenseStatus.EXPIRED

    def test_expire_on_last_valid_day_rejected(self):
        """Test a license is still valid on its expiration date."""
        license = make_license(expiration_date=TODAY)
        with pytest.raises(InvalidTransitionError):
            license.expire(TODAY)

    def test_renew_extends_by_billing_period(self):
        """Test renewal adds one period and resets the notification counter."""
        license = make_license(
            activation_date=date(2024, 1, 1), expiration_date=date(2024, 1, 31)
        ).record_alert(TODAY)

        renewed = license.renew(SubscriptionType.MONTHLY)

        assert renewed.expiration_date == date(2024, 2, 29)
        assert renewed.notifications_sent == 0

    def test_renew_yearly(self):
        """Test yearly renewal."""
        license = make_license(expiration_date=date(2024, 12, 31))
        assert license.renew(SubscriptionType.YEARLY).expiration_date == date(2025, 12, 31)

    def test_rejected_renewal_leaves_license_unchanged(self):
        """Test a failed renewal does not alter the original."""
        license = make_license(status=LicenseStatus.PENDING)
        before = license.expiration_date

        with pytest.raises(InvalidTransitionError):
            license.renew(SubscriptionType.YEARLY)

        assert license.expiration_date == before
        assert license.status == LicenseStatus.PENDING


class TestLicenseExpiry:
    """Tests for expiry checks."""

    @pytest.mark.parametrize(
        "days_left,threshold,expected",
        [
            (0, 14, True),
            (14, 14, True),
            (15, 14, False),
            (-1, 14, False),
            (0, 0, True),
            (1, 0, False),
        ],
    )
    def test_is_expiring_boundaries(self, days_left, threshold, expected):
        """Test the window includes today and the threshold day."""
        license = make_license(
            activation_date=TODAY - timedelta(days=30),
            expiration_date=TODAY + timedelta(days=days_left),
        )
        assert license.is_expiring(threshold, TODAY) is expected

    def test_non_active_never_expiring(self):
        """Test pending licenses are not reported as expiring."""
        license = make_license(status=LicenseStatus.PENDING, expiration_date=TODAY)
        assert license.is_expiring(14, TODAY) is False

    def test_record_alert(self):
        """Test recording an alert advances the counter and stamps the day."""
        license = make_license().record_alert(TODAY)

        assert license.notifications_sent == 1
        assert license.last_checked == TODAY
        assert license.checked_on(TODAY)
        assert not license.checked_on(TODAY + timedelta(days=1))
