"""
Invoice, Transaction and Sequence models.
"""
import uuid

from django.db import models
from django.utils import timezone


class Invoice(models.Model):
    """
    An invoice issued to a client, optionally for a subscription.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey("clients.Client", on_delete=models.CASCADE, related_name="invoices")
    subscription = models.ForeignKey(
        "subscriptions.Subscription",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices",
    )
    invoice_number = models.CharField(max_length=50, unique=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    issue_date = models.DateField()
    due_date = models.DateField()
    is_paid = models.BooleanField(default=False)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "invoices"
        ordering = ["-issue_date", "-created_at"]
        indexes = [
            models.Index(fields=["client", "is_paid"], name="invoices_client_paid_idx"),
        ]

    def __str__(self):
        return self.invoice_number


class Transaction(models.Model):
    """
    A payment transaction by a client.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
        ("refunded", "Refunded"),
        ("failed", "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(
        "clients.Client", on_delete=models.CASCADE, related_name="transactions"
    )
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    payment_method = models.CharField(max_length=50)
    transaction_date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-transaction_date"]
        indexes = [
            models.Index(
                fields=["status", "transaction_date"], name="transactions_status_date_idx"
            ),
            models.Index(fields=["client"], name="transactions_client_idx"),
        ]

    def __str__(self):
        return f"{self.client.company_name} {self.amount} ({self.status})"


class Sequence(models.Model):
    """
    Named counter advanced with a single UPDATE ... SET value = value + 1.
    """

    name = models.CharField(max_length=100, primary_key=True)
    value = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "sequences"

    def __str__(self):
        return f"{self.name}={self.value}"
