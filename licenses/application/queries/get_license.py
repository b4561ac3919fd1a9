"""
License queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.actor import Actor


@dataclass
class GetLicenseQuery:
    """Query a single license on behalf of an actor."""

    actor: Actor
    license_id: uuid.UUID


@dataclass
class ListLicensesQuery:
    """List licenses visible to an actor."""

    actor: Actor
    subscription_id: Optional[uuid.UUID] = None
    client_id: Optional[uuid.UUID] = None
