"""
Invoice number generation.

Numbers have the form PREFIX-YEAR-NNNNN, the counter coming from a
named sequence per year. The counter is zero-padded to five digits and
grows wider past 99999.
"""
from datetime import date
from typing import Optional

DEFAULT_PREFIX = "INV"


def format_invoice_number(prefix: str, year: int, value: int) -> str:
    """Render an invoice number."""
    return f"{prefix}-{year}-{value:05d}"


def sequence_name(year: int) -> str:
    """Name of the counter backing invoice numbers for a year."""
    return f"invoice:{year}"


class InvoiceNumberGenerator:
    """
    Domain service for invoice numbers.

    The sequence must hand out each value once, even under concurrent
    callers; the generator itself keeps no state.
    """

    def __init__(self, sequence: "InvoiceSequence", prefix: str = DEFAULT_PREFIX):  # noqa: F821
        """
        Initialize generator.

        Args:
            sequence: Atomic counter port
            prefix: Invoice number prefix
        """
        self.sequence = sequence
        self.prefix = prefix

    def next_number(self, issue_date: Optional[date] = None) -> str:
        """Draw the next invoice number for the issue date's year."""
        year = (issue_date or date.today()).year
        value = self.sequence.next_value(sequence_name(year))
        return format_invoice_number(self.prefix, year, value)
