"""
Model registration for the licenses app.
"""
from licenses.infrastructure.models import AuditLog, License, LicenseAlert  # noqa: F401
