"""
Django admin configuration for notifications app.
"""
from django.contrib import admin

from notifications.infrastructure.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin interface for Notification model."""

    list_display = ["title", "user", "type", "is_read", "created_at"]
    list_filter = ["type", "is_read", "created_at"]
    search_fields = ["title", "user__username"]
    readonly_fields = ["id", "created_at"]
