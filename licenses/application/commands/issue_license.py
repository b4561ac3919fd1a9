"""
IssueLicenseCommand.

Command to issue a license under a subscription.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.value_objects import LicenseStatus


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    The key is generated when not supplied; the expiration date
    defaults to the subscription's end date.
    """

    subscription_id: uuid.UUID
    license_key: Optional[str] = None
    status: LicenseStatus = LicenseStatus.ACTIVE
    activation_date: Optional[date] = None
    expiration_date: Optional[date] = None
    today: Optional[date] = None
