"""
Integration tests for authentication, dashboard and subscription endpoints.
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone

from accounts.infrastructure.models import Staff
from billing.infrastructure.models import Transaction as TransactionModel
from licenses.infrastructure.models import License as LicenseModel
from tickets.infrastructure.models import Ticket as TicketModel


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthentication:
    """Integration tests for caller resolution."""

    def test_anonymous_rejected(self, api_client):
        """Test API calls without a session get 401."""
        response = api_client.get(reverse("licenses"))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    def test_user_without_role_forbidden(self, login):
        """Test a user with no profile gets 403."""
        user = get_user_model().objects.create_user(username="nobody", password="secret")

        response = login(user).get(reverse("licenses"))

        assert response.status_code == 403

    def test_superuser_acts_as_admin(self, login):
        """Test a superuser without a profile can reach admin endpoints."""
        user = get_user_model().objects.create_superuser(
            username="root", email="root@example.com", password="secret"
        )

        response = login(user).post(reverse("expire-licenses"), {}, format="json")

        assert response.status_code == 200

    def test_health_needs_no_session(self, api_client):
        """Test health checks stay public."""
        response = api_client.get(reverse("health"))

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.django_db
@pytest.mark.integration
class TestDashboardAPI:
    """Integration tests for dashboard endpoints."""

    def test_client_forbidden(self, login, client_account):
        """Test the dashboard is staff-only."""
        api = login(client_account[0])

        assert api.get(reverse("dashboard-stats")).status_code == 403
        assert api.get(reverse("dashboard-expiring-licenses")).status_code == 403
        assert api.get(reverse("dashboard-recent-transactions")).status_code == 403
        assert api.get(reverse("dashboard-recent-tickets")).status_code == 403

    def test_stats(self, login, support_user, client_account, subscription):
        """Test headline statistics."""
        client = client_account[1]
        LicenseModel.objects.create(
            subscription=subscription,
            license_key="DASH-1",
            status="active",
            activation_date=date.today(),
            expiration_date=date.today() + timedelta(days=60),
        )
        TicketModel.objects.create(client=client, title="Help", status="new")
        TicketModel.objects.create(client=client, title="Done", status="closed")
        TransactionModel.objects.create(
            client=client,
            amount=Decimal("75.00"),
            status="completed",
            payment_method="card",
            transaction_date=timezone.now(),
        )
        TransactionModel.objects.create(
            client=client,
            amount=Decimal("500.00"),
            status="pending",
            payment_method="card",
            transaction_date=timezone.now(),
        )

        response = login(support_user).get(reverse("dashboard-stats"))

        assert response.status_code == 200
        body = response.json()
        assert body["total_clients"] == 1
        assert body["active_licenses"] == 1
        assert body["open_tickets"] == 1
        assert body["monthly_revenue"] == "75.00"
        assert body["failed"] == []

    def test_expiring_licenses(self, login, sales_user, subscription):
        """Test the expiring list honours the window and touches no counters."""
        soon = LicenseModel.objects.create(
            subscription=subscription,
            license_key="SOON-1",
            status="active",
            activation_date=date.today(),
            expiration_date=date.today() + timedelta(days=5),
        )
        LicenseModel.objects.create(
            subscription=subscription,
            license_key="LATER-1",
            status="active",
            activation_date=date.today(),
            expiration_date=date.today() + timedelta(days=50),
        )

        response = login(sales_user).get(reverse("dashboard-expiring-licenses"), {"days": 7})

        assert response.status_code == 200
        body = response.json()
        assert [item["license_id"] for item in body] == [str(soon.id)]
        assert body[0]["expires_in"] == 5
        assert body[0]["company_name"] == "Acme Ltd"
        assert LicenseModel.objects.get(id=soon.id).notifications_sent == 0

    def test_expiring_negative_days(self, login, sales_user):
        """Test a negative window is a validation error."""
        response = login(sales_user).get(reverse("dashboard-expiring-licenses"), {"days": -1})

        assert response.status_code == 400

    def test_recent_transactions(self, login, admin_user, client_account):
        """Test recent transactions carry the company name."""
        TransactionModel.objects.create(
            client=client_account[1],
            amount=Decimal("12.00"),
            status="completed",
            payment_method="card",
        )

        response = login(admin_user).get(reverse("dashboard-recent-transactions"))

        assert response.status_code == 200
        assert response.json()[0]["company_name"] == "Acme Ltd"

    def test_recent_tickets(self, login, admin_user, support_user, client_account):
        """Test the latest five tickets carry client and assignee names."""
        client = client_account[1]
        staff = Staff.objects.get(user=support_user)
        for number in range(5):
            TicketModel.objects.create(client=client, title=f"Older {number}")
        assigned = TicketModel.objects.create(client=client, title="Newest", assigned_to=staff)
        TicketModel.objects.filter(id=assigned.id).update(
            created_at=timezone.now() + timedelta(minutes=1)
        )

        response = login(admin_user).get(reverse("dashboard-recent-tickets"))

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 5
        newest = body[0]
        assert newest["id"] == str(assigned.id)
        assert newest["company_name"] == "Acme Ltd"
        assert newest["assignee_name"] == support_user.username

    def test_recent_tickets_support_scope(self, login, support_user, make_user, client_account):
        """Test support sees recent tickets that are unassigned or theirs."""
        client = client_account[1]
        colleague = Staff.objects.get(user=make_user("support"))
        me = Staff.objects.get(user=support_user)
        unassigned = TicketModel.objects.create(client=client, title="Unassigned")
        mine = TicketModel.objects.create(client=client, title="Mine", assigned_to=me)
        TicketModel.objects.create(client=client, title="Theirs", assigned_to=colleague)

        response = login(support_user).get(reverse("dashboard-recent-tickets"))

        assert response.status_code == 200
        assert {item["id"] for item in response.json()} == {str(unassigned.id), str(mine.id)}


@pytest.mark.django_db
@pytest.mark.integration
class TestSubscriptionAPI:
    """Integration tests for subscription endpoints."""

    def test_create_defaults_end_date(self, login, sales_user, client_account, product):
        """Test the end date defaults to one billing period after the start."""
        response = login(sales_user).post(
            reverse("subscriptions"),
            {
                "client_id": str(client_account[1].id),
                "product_id": str(product.id),
                "subscription_type": "monthly",
                "start_date": "2024-01-31",
                "price": "49.00",
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["end_date"] == "2024-02-29"

    def test_create_rejects_reversed_dates(self, login, sales_user, client_account, product):
        """Test the end date must follow the start date."""
        response = login(sales_user).post(
            reverse("subscriptions"),
            {
                "client_id": str(client_account[1].id),
                "product_id": str(product.id),
                "subscription_type": "yearly",
                "start_date": "2024-06-01",
                "end_date": "2024-05-01",
                "price": "10.00",
            },
            format="json",
        )

        assert response.status_code == 400
        assert "end_date" in response.json()["error"]["fields"]

    def test_client_ownership(self, login, client_account, subscription, other_subscription):
        """Test clients read their own subscriptions only."""
        api = login(client_account[0])

        assert api.get(
            reverse("subscription-detail", args=[subscription.id])
        ).status_code == 200
        assert api.get(
            reverse("subscription-detail", args=[other_subscription.id])
        ).status_code == 403
        assert api.get(
            reverse("subscription-detail", args=[uuid.uuid4()])
        ).status_code == 403
