"""
Django admin configuration for billing app.
"""
from django.contrib import admin

from billing.infrastructure.models import Invoice, Sequence, Transaction


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """Admin interface for Invoice model."""

    list_display = [
        "invoice_number",
        "client",
        "total_amount",
        "issue_date",
        "due_date",
        "is_paid",
    ]
    list_filter = ["is_paid", "issue_date", "due_date"]
    search_fields = ["invoice_number", "client__company_name"]
    readonly_fields = ["id", "invoice_number", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("client")


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transaction model."""

    list_display = ["client", "invoice", "amount", "status", "payment_method", "transaction_date"]
    list_filter = ["status", "payment_method", "transaction_date"]
    search_fields = ["client__company_name", "invoice__invoice_number"]
    readonly_fields = ["id", "created_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("client", "invoice")


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    """Read-only view of named counters."""

    list_display = ["name", "value"]

    def has_change_permission(self, request, obj=None):
        """Counters only move through the sequence adapter."""
        return False
