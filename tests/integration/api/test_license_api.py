"""
Integration tests for License API endpoints.
"""

import uuid
from datetime import date, timedelta

import pytest
from django.urls import reverse

from licenses.domain.license_key import is_generated_key
from licenses.infrastructure.models import AuditLog
from licenses.infrastructure.models import License as LicenseModel


def create_license(subscription, days=30, status="active", key=None):
    return LicenseModel.objects.create(
        subscription=subscription,
        license_key=key or f"LIC-{uuid.uuid4().hex.upper()}-20240101",
        status=status,
        activation_date=date.today() - timedelta(days=1),
        expiration_date=date.today() + timedelta(days=days),
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAPI:
    """Integration tests for License API."""

    def test_issue_license_generates_key(self, login, sales_user, subscription):
        """Test issuing a license without a key generates one."""
        api = login(sales_user)

        response = api.post(
            reverse("licenses"), {"subscription_id": str(subscription.id)}, format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert is_generated_key(body["license_key"])
        assert body["status"] == "active"
        assert body["expiration_date"] == subscription.end_date.isoformat()
        assert body["client_id"] == str(subscription.client_id)
        assert AuditLog.objects.filter(
            entity_id=body["id"], action="license_issued"
        ).exists()

    def test_two_keyless_licenses_get_distinct_keys(self, login, sales_user, subscription):
        """Test consecutive keyless issues on one subscription never share a key."""
        api = login(sales_user)
        payload = {"subscription_id": str(subscription.id)}

        first = api.post(reverse("licenses"), payload, format="json")
        second = api.post(reverse("licenses"), payload, format="json")

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["license_key"] != second.json()["license_key"]

    def test_issue_with_taken_key(self, login, sales_user, subscription):
        """Test a duplicate supplied key is a conflict."""
        create_license(subscription, key="TAKEN-KEY")
        api = login(sales_user)

        response = api.post(
            reverse("licenses"),
            {"subscription_id": str(subscription.id), "license_key": "TAKEN-KEY"},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "LICENSE_KEY_CONFLICT"

    def test_issue_unknown_subscription(self, login, sales_user):
        """Test issuing under a missing subscription."""
        api = login(sales_user)

        response = api.post(
            reverse("licenses"), {"subscription_id": str(uuid.uuid4())}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SUBSCRIPTION_NOT_FOUND"

    def test_issue_invalid_body(self, login, sales_user):
        """Test field errors are reported in the error envelope."""
        api = login(sales_user)

        response = api.post(reverse("licenses"), {"subscription_id": "nope"}, format="json")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "subscription_id" in error["fields"]

    def test_support_cannot_issue(self, login, support_user, subscription):
        """Test the support role may not issue licenses."""
        api = login(support_user)

        response = api.post(
            reverse("licenses"), {"subscription_id": str(subscription.id)}, format="json"
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_activate_pending(self, login, sales_user, subscription):
        """Test activating a pending license."""
        license = create_license(subscription, status="pending")
        api = login(sales_user)

        response = api.post(reverse("activate-license", args=[license.id]))

        assert response.status_code == 200
        assert response.json()["status"] == "active"
        assert response.json()["activation_date"] == date.today().isoformat()

    def test_revoke_twice(self, login, sales_user, subscription):
        """Test revoking a revoked license is an invalid transition."""
        license = create_license(subscription)
        api = login(sales_user)

        first = api.post(reverse("revoke-license", args=[license.id]))
        second = api.post(reverse("revoke-license", args=[license.id]))

        assert first.status_code == 200
        assert second.status_code == 400
        error = second.json()["error"]
        assert error["code"] == "INVALID_TRANSITION"
        assert error["current"] == "revoked"

    def test_renew_resets_notifications(self, login, sales_user, subscription):
        """Test renewal extends by the billing period and resets the counter."""
        license = create_license(subscription, days=10)
        LicenseModel.objects.filter(id=license.id).update(notifications_sent=2)
        api = login(sales_user)

        response = api.post(reverse("renew-license", args=[license.id]))

        assert response.status_code == 200
        body = response.json()
        assert body["notifications_sent"] == 0
        assert date.fromisoformat(body["expiration_date"]) > license.expiration_date

    def test_staff_get_missing_license(self, login, support_user):
        """Test staff get 404 for a missing license."""
        api = login(support_user)

        response = api.get(reverse("license-detail", args=[uuid.uuid4()]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_client_reads_own_license(self, login, client_account, subscription):
        """Test a client can read its own license."""
        license = create_license(subscription)
        api = login(client_account[0])

        response = api.get(reverse("license-detail", args=[license.id]))

        assert response.status_code == 200
        assert response.json()["id"] == str(license.id)

    def test_client_cannot_read_foreign_license(
        self, login, client_account, other_subscription
    ):
        """Test a client gets 403 for another client's license and for a missing one."""
        theirs = create_license(other_subscription)
        api = login(client_account[0])

        foreign = api.get(reverse("license-detail", args=[theirs.id]))
        missing = api.get(reverse("license-detail", args=[uuid.uuid4()]))

        assert foreign.status_code == 403
        assert foreign.json()["error"]["code"] == "FORBIDDEN"
        assert "license_key" not in foreign.json()
        assert missing.status_code == 403

    def test_client_list_scoped(self, login, client_account, subscription, other_subscription):
        """Test a client listing contains only its own licenses."""
        mine = create_license(subscription)
        create_license(other_subscription)
        api = login(client_account[0])

        response = api.get(reverse("licenses"))

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(mine.id)]


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseBatchAPI:
    """Integration tests for expiry sweep and alert dispatch endpoints."""

    def test_sweep_admin_only(self, login, sales_user):
        """Test only admins may run the expiry sweep."""
        response = login(sales_user).post(reverse("expire-licenses"), {}, format="json")
        assert response.status_code == 403

    def test_sweep_expires_overdue(self, login, admin_user, subscription):
        """Test the sweep expires overdue licenses."""
        overdue = LicenseModel.objects.create(
            subscription=subscription,
            license_key="OVERDUE-1",
            status="active",
            activation_date=date.today() - timedelta(days=40),
            expiration_date=date.today() - timedelta(days=1),
        )
        current = create_license(subscription)
        api = login(admin_user)

        dry = api.post(reverse("expire-licenses"), {"dry_run": True}, format="json")
        assert dry.json()["expired"] == [str(overdue.id)]
        assert LicenseModel.objects.get(id=overdue.id).status == "active"

        response = api.post(reverse("expire-licenses"), {}, format="json")

        assert response.status_code == 200
        assert response.json()["expired_count"] == 1
        assert LicenseModel.objects.get(id=overdue.id).status == "expired"
        assert LicenseModel.objects.get(id=current.id).status == "active"

    def test_dispatch_admin_only(self, login, support_user):
        """Test only admins may dispatch alerts."""
        response = login(support_user).post(
            reverse("dispatch-license-alerts"), {}, format="json"
        )
        assert response.status_code == 403

    def test_dispatch_twice_same_day(self, login, admin_user, subscription, mailoutbox):
        """Test dispatching twice a day sends one alert per license."""
        license = create_license(subscription, days=3)
        api = login(admin_user)

        first = api.post(reverse("dispatch-license-alerts"), {"days": 7}, format="json")
        second = api.post(reverse("dispatch-license-alerts"), {"days": 7}, format="json")

        assert first.json()["dispatched"] == [str(license.id)]
        assert second.json()["dispatched"] == []
        assert LicenseModel.objects.get(id=license.id).notifications_sent == 1
        assert len(mailoutbox) == 1
