"""
Dashboard queries.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.actor import Actor


@dataclass
class GetDashboardStatsQuery:
    """Headline statistics; now defaults to the current time."""

    now: Optional[datetime] = None


@dataclass
class GetRecentTransactionsQuery:
    """Latest transactions across all clients."""

    limit: int = 5


@dataclass
class GetRecentTicketsQuery:
    """Latest tickets visible to an actor."""

    actor: Actor
    limit: int = 5
