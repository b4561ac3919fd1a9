"""
Model registration for the billing app.
"""
from billing.infrastructure.models import Invoice, Sequence, Transaction  # noqa: F401
