"""
Subscription model.
"""
import uuid

from django.db import models


class Subscription(models.Model):
    """
    A client's subscription to a product for a billing period.
    """

    TYPE_CHOICES = [
        ("monthly", "Monthly"),
        ("quarterly", "Quarterly"),
        ("yearly", "Yearly"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(
        "clients.Client", on_delete=models.CASCADE, related_name="subscriptions"
    )
    product = models.ForeignKey(
        "clients.Product", on_delete=models.PROTECT, related_name="subscriptions"
    )
    subscription_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    start_date = models.DateField()
    end_date = models.DateField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    auto_renew = models.BooleanField(default=False)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "subscriptions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["client"], name="subscriptions_client_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_date__lt=models.F("end_date")),
                name="subscription_start_before_end",
            ),
        ]

    def __str__(self):
        return f"{self.client.company_name} - {self.product.name} ({self.subscription_type})"
