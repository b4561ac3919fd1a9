"""
Dashboard DTOs (Data Transfer Objects).
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass
class DashboardStatsDTO:
    """
    Headline statistics.

    failed names the statistics that could not be computed and were
    reported as zero.
    """

    total_clients: int = 0
    active_licenses: int = 0
    open_tickets: int = 0
    monthly_revenue: Decimal = Decimal("0.00")
    failed: List[str] = field(default_factory=list)
