"""
GetExpiringLicensesQuery.

Read-only query; never changes notification counters.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class GetExpiringLicensesQuery:
    """Active licenses expiring within threshold_days of today."""

    threshold_days: int = 14
    today: Optional[date] = None
