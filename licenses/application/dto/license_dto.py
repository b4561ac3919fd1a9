"""
License DTOs (Data Transfer Objects).

DTOs for batch operations on licenses.
"""
import uuid
from dataclasses import dataclass, field
from typing import List


@dataclass
class ExpirySweepResult:
    """Outcome of an expiry sweep."""

    expired: List[uuid.UUID] = field(default_factory=list)
    conflicts: List[uuid.UUID] = field(default_factory=list)
    dry_run: bool = False

    @property
    def expired_count(self) -> int:
        return len(self.expired)


@dataclass
class AlertDispatchResult:
    """Outcome of an alert dispatch run."""

    dispatched: List[uuid.UUID] = field(default_factory=list)
    skipped: List[uuid.UUID] = field(default_factory=list)
    failed: List[uuid.UUID] = field(default_factory=list)
