"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
import uuid
from datetime import date
from typing import Optional

from core.domain.exceptions import LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import DEFAULT_PREFIX, generate_license_key

logger = logging.getLogger(__name__)


class LicenseIssuer:
    """
    Domain service for issuing licenses with unique keys.

    Keys are generated optimistically and verified on insert. A
    collision on a generated key is retried once with a fresh key; a
    collision on a caller-supplied key is reported immediately.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        repository: "LicenseRepository",  # noqa: F821
        key_prefix: str = DEFAULT_PREFIX,
    ):
        """
        Initialize issuer.

        Args:
            repository: License repository
            key_prefix: Prefix for generated keys
        """
        self.repository = repository
        self.key_prefix = key_prefix

    async def issue(
        self,
        subscription_id: uuid.UUID,
        expiration_date: date,
        license_key: Optional[str] = None,
        activation_date: Optional[date] = None,
        status: LicenseStatus = LicenseStatus.ACTIVE,
        client_id: Optional[uuid.UUID] = None,
        today: Optional[date] = None,
    ) -> License:
        """
        Issue and persist a license.

        Raises:
            LicenseKeyConflictError: If the key collides (twice for generated keys)
        """
        today = today or date.today()
        attempts = 1 if license_key else self.MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            license = License.issue(
                subscription_id=subscription_id,
                license_key=license_key or generate_license_key(self.key_prefix, today),
                expiration_date=expiration_date,
                activation_date=activation_date,
                status=status,
                client_id=client_id,
                today=today,
            )
            try:
                return await self.repository.add(license)
            except LicenseKeyConflictError:
                if attempt == attempts:
                    raise
                logger.warning(
                    "Generated license key collided, regenerating",
                    extra={"subscription_id": str(subscription_id)},
                )
        raise LicenseKeyConflictError()
