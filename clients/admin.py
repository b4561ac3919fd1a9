"""
Django admin configuration for clients app.
"""
from django.contrib import admin

from clients.infrastructure.models import Client, Product


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin interface for Client model."""

    list_display = ["company_name", "user", "contact_email", "country", "created_at"]
    list_filter = ["country", "created_at"]
    search_fields = ["company_name", "contact_email", "user__username"]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "user", "company_name", "contact_email", "phone_number", "website"),
            },
        ),
        (
            "Address",
            {
                "fields": ("address", "city", "state", "postal_code", "country"),
                "classes": ("collapse",),
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


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["name", "price", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["id", "created_at", "updated_at"]
