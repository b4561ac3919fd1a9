"""
RenewLicenseCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class RenewLicenseCommand:
    """Command to renew a license."""

    license_id: uuid.UUID
    today: Optional[date] = None
