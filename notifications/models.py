"""
Model registration for the notifications app.
"""
from notifications.infrastructure.models import Notification  # noqa: F401
