"""
Unit tests for license key generation and LicenseIssuer.
"""
import uuid
from datetime import date

import pytest

from core.domain.exceptions import LicenseKeyConflictError
from licenses.domain.license_key import generate_license_key, is_generated_key
from licenses.domain.services import LicenseIssuer
from tests.fakes import InMemoryLicenseRepository

TODAY = date(2024, 6, 1)


class TestLicenseKey:
    """Tests for license key generation."""

    def test_format(self):
        """Test keys carry the prefix, a hex token and the issue date."""
        key = generate_license_key("LIC", TODAY)

        prefix, token, stamp = key.split("-")
        assert prefix == "LIC"
        assert len(token) == 32
        assert stamp == "20240601"
        assert is_generated_key(key)

    def test_custom_prefix(self):
        """Test the prefix is configurable."""
        assert generate_license_key("ACME", TODAY).startswith("ACME-")

    def test_keys_are_distinct(self):
        """Test keys generated on the same day differ."""
        keys = {generate_license_key("LIC", TODAY) for _ in range(500)}
        assert len(keys) == 500

    def test_free_form_key_is_not_generated(self):
        """Test caller-supplied keys are told apart from generated ones."""
        assert not is_generated_key("CUSTOMER-KEY-1")


class CollidingLicenseRepository(InMemoryLicenseRepository):
    """Repository rejecting the first N inserts as key collisions."""

    def __init__(self, collisions: int):
        super().__init__()
        self.collisions = collisions
        self.attempted_keys = []

    async def add(self, license):
        self.attempted_keys.append(license.license_key)
        if self.collisions:
            self.collisions -= 1
            raise LicenseKeyConflictError()
        return await super().add(license)


@pytest.mark.asyncio
class TestLicenseIssuer:
    """Tests for LicenseIssuer."""

    async def test_generates_key_when_absent(self):
        """Test a key is generated when none is supplied."""
        repository = InMemoryLicenseRepository()
        issuer = LicenseIssuer(repository, key_prefix="LIC")

        license = await issuer.issue(
            subscription_id=uuid.uuid4(), expiration_date=date(2025, 6, 1), today=TODAY
        )

        assert is_generated_key(license.license_key)
        assert license.id in repository.licenses

    async def test_two_keyless_issues_get_distinct_keys(self):
        """Test back-to-back issues never share a key."""
        issuer = LicenseIssuer(InMemoryLicenseRepository())
        subscription_id = uuid.uuid4()

        first = await issuer.issue(subscription_id, date(2025, 6, 1), today=TODAY)
        second = await issuer.issue(subscription_id, date(2025, 6, 1), today=TODAY)

        assert first.license_key != second.license_key

    async def test_generated_collision_retried_once(self):
        """Test a colliding generated key is replaced with a fresh one."""
        repository = CollidingLicenseRepository(collisions=1)
        issuer = LicenseIssuer(repository)

        license = await issuer.issue(uuid.uuid4(), date(2025, 6, 1), today=TODAY)

        assert len(repository.attempted_keys) == 2
        assert repository.attempted_keys[0] != repository.attempted_keys[1]
        assert license.license_key == repository.attempted_keys[1]

    async def test_second_generated_collision_raises(self):
        """Test the retry is bounded."""
        repository = CollidingLicenseRepository(collisions=2)
        issuer = LicenseIssuer(repository)

        with pytest.raises(LicenseKeyConflictError):
            await issuer.issue(uuid.uuid4(), date(2025, 6, 1), today=TODAY)
        assert len(repository.attempted_keys) == 2

    async def test_supplied_key_collision_not_retried(self):
        """Test a caller-supplied duplicate key fails immediately."""
        repository = CollidingLicenseRepository(collisions=1)
        issuer = LicenseIssuer(repository)

        with pytest.raises(LicenseKeyConflictError):
            await issuer.issue(
                uuid.uuid4(), date(2025, 6, 1), license_key="CUSTOMER-KEY-1", today=TODAY
            )
        assert repository.attempted_keys == ["CUSTOMER-KEY-1"]
