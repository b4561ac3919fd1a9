"""
Django models for the subscriptions app.

Models live in infrastructure/models.py and are imported here
so Django's app registry discovers them.
"""
from subscriptions.infrastructure.models import Subscription  # noqa: F401
