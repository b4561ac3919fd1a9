"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Staff, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    """Admin interface for UserProfile model."""

    list_display = ["user", "role", "phone", "created_at"]
    list_filter = ["role"]
    search_fields = ["user__username", "user__email"]
    readonly_fields = ["id", "created_at", "updated_at"]


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    """Admin interface for Staff model."""

    list_display = ["user", "department", "position", "hire_date", "is_active"]
    list_filter = ["department", "is_active"]
    search_fields = ["user__username", "department", "position"]
    readonly_fields = ["id", "created_at", "updated_at"]
