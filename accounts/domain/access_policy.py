"""
Access policy.

Role-based authorization expressed as a table of operations and the
roles allowed to perform them, plus the ownership rules for
client-scoped reads and the ticket visibility rule for support staff.
"""
import logging
import uuid
from enum import Enum
from typing import Dict, FrozenSet, Optional

from accounts.domain.actor import Actor
from core.domain.exceptions import ForbiddenError, NotFoundError
from core.domain.value_objects import Role

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Operations gated by the access policy."""

    LICENSE_READ = "license.read"
    LICENSE_ISSUE = "license.issue"
    LICENSE_ACTIVATE = "license.activate"
    LICENSE_REVOKE = "license.revoke"
    LICENSE_RENEW = "license.renew"
    LICENSE_EXPIRE_SWEEP = "license.expire_sweep"
    LICENSE_ALERT_DISPATCH = "license.alert_dispatch"
    SUBSCRIPTION_READ = "subscription.read"
    SUBSCRIPTION_CREATE = "subscription.create"
    SUBSCRIPTION_UPDATE = "subscription.update"
    INVOICE_READ = "invoice.read"
    INVOICE_CREATE = "invoice.create"
    TRANSACTION_READ = "transaction.read"
    TRANSACTION_CREATE = "transaction.create"
    TICKET_READ = "ticket.read"
    TICKET_CREATE = "ticket.create"
    TICKET_UPDATE = "ticket.update"
    NOTIFICATION_READ = "notification.read"
    DASHBOARD_READ = "dashboard.read"

    def __str__(self) -> str:
        return self.value


EVERYONE = frozenset(Role)
STAFF = frozenset({Role.ADMIN, Role.SALES, Role.SUPPORT})
SALES = frozenset({Role.ADMIN, Role.SALES})
SUPPORT = frozenset({Role.ADMIN, Role.SUPPORT})
ADMIN = frozenset({Role.ADMIN})

POLICY_TABLE: Dict[Operation, FrozenSet[Role]] = {
    Operation.LICENSE_READ: EVERYONE,
    Operation.LICENSE_ISSUE: SALES,
    Operation.LICENSE_ACTIVATE: SALES,
    Operation.LICENSE_REVOKE: SALES,
    Operation.LICENSE_RENEW: SALES,
    Operation.LICENSE_EXPIRE_SWEEP: ADMIN,
    Operation.LICENSE_ALERT_DISPATCH: ADMIN,
    Operation.SUBSCRIPTION_READ: EVERYONE,
    Operation.SUBSCRIPTION_CREATE: SALES,
    Operation.SUBSCRIPTION_UPDATE: SALES,
    Operation.INVOICE_READ: EVERYONE,
    Operation.INVOICE_CREATE: SALES,
    Operation.TRANSACTION_READ: EVERYONE,
    Operation.TRANSACTION_CREATE: SALES,
    Operation.TICKET_READ: EVERYONE,
    Operation.TICKET_CREATE: EVERYONE,
    Operation.TICKET_UPDATE: SUPPORT,
    Operation.NOTIFICATION_READ: EVERYONE,
    Operation.DASHBOARD_READ: STAFF,
}


class AccessPolicy:
    """
    Evaluates the policy table and ownership rules.

    Operations missing from the table are denied.
    """

    def __init__(self, table: Optional[Dict[Operation, FrozenSet[Role]]] = None):
        """Initialize with a policy table (defaults to POLICY_TABLE)."""
        self._table = table if table is not None else POLICY_TABLE

    def is_allowed(self, actor: Actor, operation: Operation) -> bool:
        """Check whether the actor's role may perform an operation."""
        return actor.role in self._table.get(operation, frozenset())

    def authorize(self, actor: Actor, operation: Operation) -> None:
        """
        Require the actor's role to be allowed for the operation.

        Raises:
            ForbiddenError: If the role is not allowed
        """
        if not self.is_allowed(actor, operation):
            logger.warning(
                "Denied %s for role %s",
                operation.value,
                actor.role.value,
                extra={"user_id": actor.user_id, "operation": operation.value},
            )
            raise ForbiddenError(f"Role '{actor.role.value}' may not perform {operation.value}")

    def ensure_owner(self, actor: Actor, owner_client_id: uuid.UUID) -> None:
        """
        Require a client-role actor to own the resource.

        Staff roles pass; ownership only constrains client callers.
        """
        if not actor.is_client:
            return
        if actor.client_id is None or actor.client_id != owner_client_id:
            raise ForbiddenError()

    def ensure_readable(
        self,
        actor: Actor,
        owner_client_id: Optional[uuid.UUID],
        not_found: NotFoundError,
    ) -> None:
        """
        Check read access to a resource that may not exist.

        A client caller gets ForbiddenError for missing resources as well
        as foreign ones, so existence is never revealed to them.

        Args:
            actor: Caller
            owner_client_id: Owning client of the resource, None if missing
            not_found: Exception raised to staff callers for missing resources
        """
        if owner_client_id is None:
            if actor.is_client:
                raise ForbiddenError()
            raise not_found
        self.ensure_owner(actor, owner_client_id)

    def scope_client(
        self, actor: Actor, requested_client_id: Optional[uuid.UUID]
    ) -> Optional[uuid.UUID]:
        """
        Resolve the client a listing is restricted to.

        Client callers are pinned to their own client; asking for
        another client's records is forbidden.
        """
        if not actor.is_client:
            return requested_client_id
        if actor.client_id is None:
            raise ForbiddenError("Client profile not found")
        if requested_client_id is not None and requested_client_id != actor.client_id:
            raise ForbiddenError()
        return actor.client_id

    def can_view_ticket(
        self,
        actor: Actor,
        ticket_client_id: uuid.UUID,
        assigned_to: Optional[uuid.UUID],
    ) -> bool:
        """
        Ticket visibility.

        Clients see their own tickets; support sees tickets assigned to
        them or unassigned ones; admin and sales see all.
        """
        if actor.is_client:
            return actor.client_id is not None and actor.client_id == ticket_client_id
        if actor.role is Role.SUPPORT:
            return assigned_to is None or (
                actor.staff_id is not None and assigned_to == actor.staff_id
            )
        return True
