"""
Django admin configuration for tickets app.
"""
from django.contrib import admin

from tickets.infrastructure.models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    """Admin interface for Ticket model."""

    list_display = ["title", "client", "status", "priority", "assigned_to", "created_at"]
    list_filter = ["status", "priority", "created_at"]
    search_fields = ["title", "client__company_name"]
    readonly_fields = ["id", "closed_at", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("client", "assigned_to__user")
