"""
ExpireLicensesCommand.

Command to run the expiry sweep.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ExpireLicensesCommand:
    """Expire every active license past its expiration date."""

    dry_run: bool = False
    today: Optional[date] = None
