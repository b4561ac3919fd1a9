"""
Django admin configuration for licenses app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import AuditLog, License, LicenseAlert


class LicenseAlertInline(admin.TabularInline):
    """Alert ledger rows shown on the license page."""

    model = LicenseAlert
    extra = 0
    readonly_fields = [
        "expiration_date",
        "sequence",
        "status",
        "claimed_at",
        "delivered_at",
    ]
    can_delete = False


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "client_name",
        "status_display",
        "activation_date",
        "expiration_date",
        "notifications_sent",
        "last_checked",
    ]
    list_filter = ["status", "expiration_date", "created_at"]
    search_fields = ["license_key", "subscription__client__company_name"]
    readonly_fields = [
        "id",
        "license_key",
        "status",
        "notifications_sent",
        "last_checked",
        "created_at",
        "updated_at",
    ]
    inlines = [LicenseAlertInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "subscription", "license_key", "status"),
            },
        ),
        (
            "Validity",
            {
                "fields": ("activation_date", "expiration_date"),
            },
        ),
        (
            "Notifications",
            {
                "fields": ("notifications_sent", "last_checked"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def client_name(self, obj):
        """Display the owning client's company name."""
        return obj.subscription.client.company_name

    client_name.short_description = "Client"

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "active": "green",
            "pending": "orange",
            "revoked": "red",
            "expired": "gray",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("subscription__client")


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin interface for AuditLog model."""

    list_display = ["action", "entity_type", "entity_id", "occurred_at"]
    list_filter = ["action", "entity_type", "occurred_at"]
    search_fields = ["entity_id"]
    readonly_fields = ["id", "event_id", "occurred_at", "created_at", "changes_display"]

    def changes_display(self, obj):
        """Display changes in a formatted way."""
        if obj.changes:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.changes, indent=2),
            )
        return "-"

    changes_display.short_description = "Changes"

    def has_add_permission(self, request):
        """Audit logs are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Audit logs should not be deleted."""
        return False
