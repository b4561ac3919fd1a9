"""
License key generation.

Keys have the form PREFIX-TOKEN-YYYYMMDD where TOKEN is 128 random
bits rendered as 32 uppercase hex characters.
"""
import re
import secrets
from datetime import date
from typing import Optional

DEFAULT_PREFIX = "LIC"

LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]+-[0-9A-F]{32}-\d{8}$")


def generate_license_key(prefix: str = DEFAULT_PREFIX, today: Optional[date] = None) -> str:
    """
    Generate a license key.

    Uniqueness is not checked here; the store's unique constraint is
    the guard.

    Args:
        prefix: Key prefix (e.g., 'LIC')
        today: Issue date embedded in the key (defaults to date.today())

    Returns:
        Generated license key string
    """
    issued = today or date.today()
    return f"{prefix}-{secrets.token_hex(16).upper()}-{issued:%Y%m%d}"


def is_generated_key(key: str) -> bool:
    """Check if a key has the generated format."""
    return bool(LICENSE_KEY_PATTERN.match(key))
