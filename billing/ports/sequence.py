"""
Sequence port (interface).

Named counters handed out atomically.
"""
from abc import ABC, abstractmethod


class InvoiceSequence(ABC):
    """
    Abstract atomic counter.

    Synchronous: it runs inside the database transaction that inserts
    the invoice it numbers.
    """

    @abstractmethod
    def next_value(self, name: str) -> int:
        """
        Advance a named counter and return its new value.

        The first value of a new counter is 1.
        """
