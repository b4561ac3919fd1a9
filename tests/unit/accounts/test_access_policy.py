"""
Unit tests for AccessPolicy.
"""
import uuid

import pytest

from accounts.domain.access_policy import POLICY_TABLE, AccessPolicy, Operation
from accounts.domain.actor import Actor
from core.domain.exceptions import ForbiddenError, LicenseNotFoundError
from core.domain.value_objects import Role

CLIENT_ID = uuid.uuid4()
STAFF_ID = uuid.uuid4()

ADMIN = Actor(user_id=1, role=Role.ADMIN, staff_id=uuid.uuid4())
SALES = Actor(user_id=2, role=Role.SALES, staff_id=uuid.uuid4())
SUPPORT = Actor(user_id=3, role=Role.SUPPORT, staff_id=STAFF_ID)
CLIENT = Actor(user_id=4, role=Role.CLIENT, client_id=CLIENT_ID)
ORPHAN_CLIENT = Actor(user_id=5, role=Role.CLIENT)


@pytest.fixture
def policy():
    return AccessPolicy()


class TestRoleTable:
    """Tests for the role table."""

    @pytest.mark.parametrize(
        "actor,operation,allowed",
        [
            (SALES, Operation.LICENSE_ISSUE, True),
            (SUPPORT, Operation.LICENSE_ISSUE, False),
            (CLIENT, Operation.LICENSE_ISSUE, False),
            (SALES, Operation.SUBSCRIPTION_CREATE, True),
            (SUPPORT, Operation.INVOICE_CREATE, False),
            (SUPPORT, Operation.TICKET_UPDATE, True),
            (SALES, Operation.TICKET_UPDATE, False),
            (CLIENT, Operation.TICKET_CREATE, True),
            (CLIENT, Operation.DASHBOARD_READ, False),
            (SUPPORT, Operation.DASHBOARD_READ, True),
            (SALES, Operation.LICENSE_EXPIRE_SWEEP, False),
            (SALES, Operation.LICENSE_ALERT_DISPATCH, False),
            (ADMIN, Operation.LICENSE_EXPIRE_SWEEP, True),
        ],
    )
    def test_is_allowed(self, policy, actor, operation, allowed):
        """Test role checks follow the table."""
        assert policy.is_allowed(actor, operation) is allowed

    def test_admin_allowed_everything(self, policy):
        """Test admin may perform every listed operation."""
        assert all(policy.is_allowed(ADMIN, operation) for operation in Operation)

    def test_every_operation_listed(self):
        """Test no operation falls back to deny-by-omission."""
        assert set(POLICY_TABLE) == set(Operation)

    def test_unlisted_operation_denied(self):
        """Test operations missing from a table are denied."""
        policy = AccessPolicy(table={})
        with pytest.raises(ForbiddenError):
            policy.authorize(ADMIN, Operation.LICENSE_READ)

    def test_authorize_raises_forbidden(self, policy):
        """Test a denied role raises ForbiddenError."""
        with pytest.raises(ForbiddenError) as exc_info:
            policy.authorize(CLIENT, Operation.LICENSE_REVOKE)
        assert exc_info.value.code == "FORBIDDEN"


class TestOwnership:
    """Tests for client ownership rules."""

    def test_staff_read_any(self, policy):
        """Test staff pass ownership checks."""
        policy.ensure_owner(SALES, uuid.uuid4())

    def test_client_reads_own(self, policy):
        """Test clients may read their own resources."""
        policy.ensure_owner(CLIENT, CLIENT_ID)

    def test_client_foreign_forbidden(self, policy):
        """Test clients may not read other clients' resources."""
        with pytest.raises(ForbiddenError):
            policy.ensure_owner(CLIENT, uuid.uuid4())

    def test_missing_resource_staff_not_found(self, policy):
        """Test staff learn a resource is missing."""
        with pytest.raises(LicenseNotFoundError):
            policy.ensure_readable(SUPPORT, None, LicenseNotFoundError())

    def test_missing_resource_client_forbidden(self, policy):
        """Test clients cannot tell missing from foreign."""
        with pytest.raises(ForbiddenError):
            policy.ensure_readable(CLIENT, None, LicenseNotFoundError())

    def test_scope_client_pins_client(self, policy):
        """Test client listings are restricted to the caller's client."""
        assert policy.scope_client(CLIENT, None) == CLIENT_ID
        assert policy.scope_client(CLIENT, CLIENT_ID) == CLIENT_ID

    def test_scope_client_foreign_forbidden(self, policy):
        """Test a client asking for another client's listing is refused."""
        with pytest.raises(ForbiddenError):
            policy.scope_client(CLIENT, uuid.uuid4())

    def test_scope_client_without_record(self, policy):
        """Test a client user with no Client record sees nothing."""
        with pytest.raises(ForbiddenError):
            policy.scope_client(ORPHAN_CLIENT, None)

    def test_scope_staff_unrestricted(self, policy):
        """Test staff listings keep the requested filter."""
        requested = uuid.uuid4()
        assert policy.scope_client(SALES, requested) == requested
        assert policy.scope_client(SALES, None) is None


class TestTicketVisibility:
    """Tests for ticket visibility."""

    def test_client_sees_own(self, policy):
        """Test clients see their own tickets only."""
        assert policy.can_view_ticket(CLIENT, CLIENT_ID, None)
        assert not policy.can_view_ticket(CLIENT, uuid.uuid4(), None)

    def test_support_sees_assigned_and_unassigned(self, policy):
        """Test support sees unassigned tickets and tickets assigned to them."""
        assert policy.can_view_ticket(SUPPORT, uuid.uuid4(), None)
        assert policy.can_view_ticket(SUPPORT, uuid.uuid4(), STAFF_ID)
        assert not policy.can_view_ticket(SUPPORT, uuid.uuid4(), uuid.uuid4())

    def test_admin_and_sales_see_all(self, policy):
        """Test admin and sales see every ticket."""
        assigned_elsewhere = uuid.uuid4()
        assert policy.can_view_ticket(ADMIN, uuid.uuid4(), assigned_elsewhere)
        assert policy.can_view_ticket(SALES, uuid.uuid4(), assigned_elsewhere)
