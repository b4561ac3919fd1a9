"""
Django implementation of the InvoiceSequence port.
"""
from django.db import IntegrityError, transaction
from django.db.models import F

from billing.infrastructure.models import Sequence
from billing.ports.sequence import InvoiceSequence


class DjangoSequence(InvoiceSequence):
    """
    Sequence backed by a row per counter.

    The increment is a single UPDATE, so the row stays locked until the
    surrounding transaction commits and concurrent callers queue on it.
    """

    def next_value(self, name: str) -> int:
        """Advance a named counter and return its new value."""
        # pylint: disable=no-member
        with transaction.atomic():
            updated = Sequence.objects.filter(name=name).update(value=F("value") + 1)
            if not updated:
                try:
                    with transaction.atomic():
                        Sequence.objects.create(name=name, value=1)
                    return 1
                except IntegrityError:
                    # Created concurrently; fall through to a plain increment.
                    Sequence.objects.filter(name=name).update(value=F("value") + 1)
            return Sequence.objects.values_list("value", flat=True).get(name=name)
