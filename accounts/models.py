"""
Model registration for the accounts app.
"""
from accounts.infrastructure.models import Staff, UserProfile  # noqa: F401
