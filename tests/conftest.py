"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from accounts.infrastructure.models import Staff, UserProfile
from clients.infrastructure.models import Client, Product
from subscriptions.infrastructure.models import Subscription


@pytest.fixture
def make_user(db):
    """Factory for users with a role assignment."""

    def _make_user(role: str, username: str = None):
        username = username or f"{role}-{uuid.uuid4().hex[:8]}"
        user = get_user_model().objects.create_user(username=username, password="secret")
        UserProfile.objects.create(user=user, role=role)
        if role != "client":
            Staff.objects.create(
                user=user,
                department="Operations",
                position=role.title(),
                hire_date=date(2023, 1, 1),
            )
        return user

    return _make_user


@pytest.fixture
def make_client(make_user):
    """Factory for a client-role user together with its Client record."""

    def _make_client(company_name: str = None, contact_email: str = "billing@example.com"):
        user = make_user("client")
        client = Client.objects.create(
            user=user,
            company_name=company_name or f"Company {uuid.uuid4().hex[:6]}",
            contact_email=contact_email,
        )
        return user, client

    return _make_client


@pytest.fixture
def admin_user(make_user):
    """Fixture for an admin user."""
    return make_user("admin")


@pytest.fixture
def sales_user(make_user):
    """Fixture for a sales user."""
    return make_user("sales")


@pytest.fixture
def support_user(make_user):
    """Fixture for a support user."""
    return make_user("support")


@pytest.fixture
def client_account(make_client):
    """Fixture for a (user, Client) pair."""
    return make_client("Acme Ltd")


@pytest.fixture
def other_client_account(make_client):
    """Fixture for a second, unrelated client."""
    return make_client("Globex Corp")


@pytest.fixture
def product(db):
    """Fixture for a Product saved in database."""
    return Product.objects.create(name="Analytics Suite", price=Decimal("49.00"))


@pytest.fixture
def make_subscription(product):
    """Factory for subscriptions saved in database."""

    def _make_subscription(client, subscription_type: str = "monthly", days: int = 365):
        start = date.today()
        return Subscription.objects.create(
            client=client,
            product=product,
            subscription_type=subscription_type,
            start_date=start,
            end_date=start + timedelta(days=days),
            price=Decimal("49.00"),
        )

    return _make_subscription


@pytest.fixture
def subscription(client_account, make_subscription):
    """Fixture for a subscription owned by client_account."""
    return make_subscription(client_account[1])


@pytest.fixture
def other_subscription(other_client_account, make_subscription):
    """Fixture for a subscription owned by other_client_account."""
    return make_subscription(other_client_account[1])


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def login(api_client):
    """Log a user into the API client and return the client."""

    def _login(user):
        api_client.force_login(user)
        return api_client

    return _login
