"""
Actor - the authenticated caller of an operation.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Role


@dataclass(frozen=True)
class Actor:
    """
    Authenticated caller.

    client_id is set for client-role users with a Client record,
    staff_id for vendor users with a Staff record.
    """

    user_id: int
    role: Role
    client_id: Optional[uuid.UUID] = None
    staff_id: Optional[uuid.UUID] = None

    @property
    def is_client(self) -> bool:
        return self.role is Role.CLIENT

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
