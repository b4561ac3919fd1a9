"""
Unit tests for Invoice and invoice numbering.
"""
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest

from billing.domain.invoice import Invoice
from billing.domain.invoice_number import (
    InvoiceNumberGenerator,
    format_invoice_number,
    sequence_name,
)
from billing.domain.transaction import Transaction
from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money, TransactionStatus
from tests.fakes import LockedSequence


class TestInvoice:
    """Tests for Invoice domain entity."""

    def test_total_computed(self):
        """Test the total defaults to amount plus tax."""
        invoice = Invoice.create(
            client_id=uuid.uuid4(),
            amount=Decimal("100.00"),
            tax=Decimal("8.25"),
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 7, 1),
        )

        assert invoice.total_amount == Money.of("108.25")
        assert invoice.is_paid is False
        assert invoice.invoice_number is None

    def test_matching_total_accepted(self):
        """Test a supplied total equal to amount plus tax is kept."""
        invoice = Invoice.create(
            client_id=uuid.uuid4(),
            amount="100.00",
            tax="8.25",
            total_amount="108.25",
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 6, 1),
        )
        assert invoice.total_amount.amount == Decimal("108.25")

    def test_mismatched_total_rejected(self):
        """Test a supplied total that disagrees is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Invoice.create(
                client_id=uuid.uuid4(),
                amount="100.00",
                tax="8.25",
                total_amount="108.00",
                issue_date=date(2024, 6, 1),
                due_date=date(2024, 7, 1),
            )
        assert "total_amount" in exc_info.value.fields

    def test_due_before_issue_rejected(self):
        """Test the due date cannot precede the issue date."""
        with pytest.raises(ValidationError) as exc_info:
            Invoice.create(
                client_id=uuid.uuid4(),
                amount="10",
                tax="0",
                issue_date=date(2024, 6, 2),
                due_date=date(2024, 6, 1),
            )
        assert "due_date" in exc_info.value.fields

    def test_negative_amount_rejected(self):
        """Test negative amounts are field errors."""
        with pytest.raises(ValidationError) as exc_info:
            Invoice.create(
                client_id=uuid.uuid4(),
                amount="-5",
                tax="0",
                issue_date=date(2024, 6, 1),
                due_date=date(2024, 7, 1),
            )
        assert "amount" in exc_info.value.fields

    def test_mark_paid(self):
        """Test marking paid returns a new instance."""
        invoice = Invoice.create(
            client_id=uuid.uuid4(),
            amount="10",
            tax="1",
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 7, 1),
        )
        paid = invoice.mark_paid()

        assert paid.is_paid is True
        assert invoice.is_paid is False


class TestTransaction:
    """Tests for Transaction domain entity."""

    def test_defaults_to_pending(self):
        """Test a new transaction is pending."""
        transaction = Transaction.create(
            client_id=uuid.uuid4(), amount="25.50", payment_method="card"
        )
        assert transaction.status == TransactionStatus.PENDING
        assert transaction.amount == Money.of("25.50")

    def test_payment_method_required(self):
        """Test a blank payment method is rejected."""
        with pytest.raises(ValidationError):
            Transaction.create(client_id=uuid.uuid4(), amount="1", payment_method=" ")


class TestInvoiceNumberGenerator:
    """Tests for InvoiceNumberGenerator."""

    def test_format(self):
        """Test numbers are zero-padded and grow past five digits."""
        assert format_invoice_number("INV", 2024, 1) == "INV-2024-00001"
        assert format_invoice_number("INV", 2024, 123456) == "INV-2024-123456"

    def test_sequence_per_year(self):
        """Test each year counts from one."""
        generator = InvoiceNumberGenerator(LockedSequence())

        assert generator.next_number(date(2024, 12, 31)) == "INV-2024-00001"
        assert generator.next_number(date(2024, 12, 31)) == "INV-2024-00002"
        assert generator.next_number(date(2025, 1, 1)) == "INV-2025-00001"
        assert sequence_name(2025) == "invoice:2025"

    def test_custom_prefix(self):
        """Test the prefix is configurable."""
        generator = InvoiceNumberGenerator(LockedSequence(), prefix="BILL")
        assert generator.next_number(date(2024, 3, 1)) == "BILL-2024-00001"

    def test_concurrent_numbers_are_unique_and_gapless(self):
        """Test concurrent callers each receive a distinct number."""
        generator = InvoiceNumberGenerator(LockedSequence())
        issue_date = date(2024, 6, 1)

        with ThreadPoolExecutor(max_workers=25) as executor:
            numbers = list(
                executor.map(lambda _: generator.next_number(issue_date), range(100))
            )

        assert len(set(numbers)) == 100
        assert sorted(numbers) == [format_invoice_number("INV", 2024, n) for n in range(1, 101)]
