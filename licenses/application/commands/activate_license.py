"""
ActivateLicenseCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license."""

    license_id: uuid.UUID
    today: Optional[date] = None
