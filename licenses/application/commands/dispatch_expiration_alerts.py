"""
DispatchExpirationAlertsCommand.

Command to send expiration alerts for licenses close to expiry.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class DispatchExpirationAlertsCommand:
    """Send one alert per expiring license not yet processed today."""

    threshold_days: int = 14
    today: Optional[date] = None
