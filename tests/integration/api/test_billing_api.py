"""
Integration tests for invoice and transaction endpoints.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse

from billing.infrastructure.models import Invoice as InvoiceModel
from billing.infrastructure.models import Transaction as TransactionModel


def invoice_payload(client, **overrides):
    payload = {
        "client_id": str(client.id),
        "amount": "100.00",
        "tax": "8.25",
        "issue_date": "2024-06-01",
        "due_date": "2024-07-01",
    }
    payload.update(overrides)
    return payload


def create_invoice(client, number=None):
    return InvoiceModel.objects.create(
        client=client,
        invoice_number=number or f"INV-X-{uuid.uuid4().hex[:6]}",
        amount=Decimal("40.00"),
        tax=Decimal("0.00"),
        total_amount=Decimal("40.00"),
        issue_date=date(2024, 6, 1),
        due_date=date(2024, 7, 1),
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestInvoiceAPI:
    """Integration tests for Invoice API."""

    def test_create_invoice_numbers_and_totals(self, login, sales_user, client_account):
        """Test invoices are numbered per year with the computed total."""
        api = login(sales_user)
        client = client_account[1]

        first = api.post(reverse("invoices"), invoice_payload(client), format="json")
        second = api.post(reverse("invoices"), invoice_payload(client), format="json")

        assert first.status_code == 201
        assert first.json()["invoice_number"] == "INV-2024-00001"
        assert first.json()["total_amount"] == "108.25"
        assert first.json()["is_paid"] is False
        assert second.json()["invoice_number"] == "INV-2024-00002"

    def test_mismatched_total(self, login, sales_user, client_account):
        """Test a total that disagrees with amount plus tax is rejected."""
        api = login(sales_user)

        response = api.post(
            reverse("invoices"),
            invoice_payload(client_account[1], total_amount="100.00"),
            format="json",
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "total_amount" in error["fields"]

    def test_unknown_client(self, login, sales_user, client_account):
        """Test invoicing a missing client."""
        api = login(sales_user)

        response = api.post(
            reverse("invoices"),
            invoice_payload(client_account[1], client_id=str(uuid.uuid4())),
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CLIENT_NOT_FOUND"

    def test_client_cannot_create(self, login, client_account):
        """Test clients may not issue invoices."""
        api = login(client_account[0])

        response = api.post(
            reverse("invoices"), invoice_payload(client_account[1]), format="json"
        )

        assert response.status_code == 403

    def test_client_reads_own_invoice_only(self, login, client_account, other_client_account):
        """Test ownership on invoice reads."""
        mine = create_invoice(client_account[1])
        theirs = create_invoice(other_client_account[1])
        api = login(client_account[0])

        assert api.get(reverse("invoice-detail", args=[mine.id])).status_code == 200
        assert api.get(reverse("invoice-detail", args=[theirs.id])).status_code == 403
        assert api.get(reverse("invoice-detail", args=[uuid.uuid4()])).status_code == 403

    def test_client_listing_scoped(self, login, client_account, other_client_account):
        """Test invoice listings only show the caller's invoices."""
        mine = create_invoice(client_account[1])
        create_invoice(other_client_account[1])
        api = login(client_account[0])

        response = api.get(reverse("invoices"))

        assert [item["id"] for item in response.json()] == [str(mine.id)]

    def test_client_listing_foreign_filter(self, login, client_account, other_client_account):
        """Test asking for another client's listing is forbidden."""
        api = login(client_account[0])

        response = api.get(reverse("invoices"), {"client_id": str(other_client_account[1].id)})

        assert response.status_code == 403


@pytest.mark.django_db
@pytest.mark.integration
class TestTransactionAPI:
    """Integration tests for Transaction API."""

    def test_record_marks_invoice_paid(self, login, sales_user, client_account):
        """Test a failed payment still marks its invoice paid."""
        client = client_account[1]
        invoice = create_invoice(client)
        api = login(sales_user)

        response = api.post(
            reverse("transactions"),
            {
                "client_id": str(client.id),
                "invoice_id": str(invoice.id),
                "amount": "40.00",
                "payment_method": "card",
                "status": "failed",
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["status"] == "failed"
        invoice.refresh_from_db()
        assert invoice.is_paid is True

    def test_missing_invoice_stores_nothing(self, login, sales_user, client_account):
        """Test a transaction against a missing invoice is rejected whole."""
        api = login(sales_user)

        response = api.post(
            reverse("transactions"),
            {
                "client_id": str(client_account[1].id),
                "invoice_id": str(uuid.uuid4()),
                "amount": "40.00",
                "payment_method": "card",
            },
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"
        assert not TransactionModel.objects.exists()

    def test_client_transaction_ownership(self, login, client_account, other_client_account):
        """Test clients cannot read other clients' transactions."""
        theirs = TransactionModel.objects.create(
            client=other_client_account[1], amount=Decimal("5.00"), payment_method="card"
        )
        api = login(client_account[0])

        assert api.get(reverse("transaction-detail", args=[theirs.id])).status_code == 403
        assert api.get(reverse("transaction-detail", args=[uuid.uuid4()])).status_code == 403
