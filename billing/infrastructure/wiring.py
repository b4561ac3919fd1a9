"""
Handler construction for billing entry points.
"""
from django.conf import settings

from billing.domain.invoice_number import DEFAULT_PREFIX, InvoiceNumberGenerator
from billing.infrastructure.repositories.django_sequence import DjangoSequence


def build_number_generator() -> InvoiceNumberGenerator:
    """Invoice number generator using the configured prefix."""
    return InvoiceNumberGenerator(
        DjangoSequence(), prefix=getattr(settings, "INVOICE_NUMBER_PREFIX", DEFAULT_PREFIX)
    )
