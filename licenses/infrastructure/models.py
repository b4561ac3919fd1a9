"""
License, LicenseAlert and AuditLog models.
"""
import uuid

from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A license issued under a subscription.

    Status changes go through the entitlement engine only.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("pending", "Pending"),
        ("expired", "Expired"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    subscription = models.ForeignKey(
        "subscriptions.Subscription", on_delete=models.CASCADE, related_name="licenses"
    )
    license_key = models.CharField(max_length=100, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    activation_date = models.DateField()
    expiration_date = models.DateField()
    last_checked = models.DateField(null=True, blank=True)
    notifications_sent = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expiration_date"], name="licenses_status_exp_idx"),
            models.Index(fields=["subscription"], name="licenses_subscription_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(activation_date__lte=models.F("expiration_date")),
                name="license_activation_before_expiration",
            ),
        ]

    def __str__(self):
        return self.license_key


class LicenseAlert(models.Model):
    """
    Ledger of expiration alerts, one row per (license, expiration_date, sequence).

    expiration_date is the renewal cycle the alert belongs to and sequence
    is the license's notifications_sent value when the alert was produced.
    """

    STATUS_CHOICES = [
        ("claimed", "Claimed"),
        ("delivered", "Delivered"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="alerts")
    expiration_date = models.DateField()
    sequence = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="claimed")
    created_at = models.DateTimeField(auto_now_add=True)
    claimed_at = models.DateTimeField(default=timezone.now)
    delivered_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "license_alerts"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "expiration_date", "sequence"],
                name="license_alert_unique_cycle_sequence",
            ),
        ]

    def __str__(self):
        return f"{self.license.license_key} #{self.sequence} ({self.status})"


class AuditLog(models.Model):
    """
    Immutable audit trail of domain events.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64)
    action = models.CharField(max_length=50)
    changes = models.JSONField(default=dict, help_text="Event payload")
    occurred_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="audit_logs_entity_idx"),
            models.Index(fields=["action"], name="audit_logs_action_idx"),
        ]

    def __str__(self):
        return f"{self.action} - {self.entity_type} {self.entity_id}"
