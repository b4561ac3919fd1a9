"""
Django admin configuration for subscriptions app.
"""
from django.contrib import admin

from subscriptions.infrastructure.models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscription model."""

    list_display = [
        "client",
        "product",
        "subscription_type",
        "start_date",
        "end_date",
        "price",
        "auto_renew",
    ]
    list_filter = ["subscription_type", "auto_renew", "start_date"]
    search_fields = ["client__company_name", "product__name"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("client", "product")
