"""
User profile and Staff models.
"""
import uuid

from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    """
    Role assignment for a Django user.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("sales", "Sales"),
        ("support", "Support"),
        ("client", "Client"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="client", db_index=True)
    phone = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "user_profiles"

    def __str__(self):
        return f"{self.user.get_username()} ({self.role})"


class Staff(models.Model):
    """
    Vendor employee record. Tickets are assigned to staff members.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="staff"
    )
    department = models.CharField(max_length=100)
    position = models.CharField(max_length=100)
    hire_date = models.DateField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "staff"
        ordering = ["user__username"]
        verbose_name_plural = "staff"

    def __str__(self):
        return f"{self.user.get_full_name() or self.user.get_username()} - {self.position}"
