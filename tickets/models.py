"""
Model registration for the tickets app.
"""
from tickets.infrastructure.models import Ticket  # noqa: F401
