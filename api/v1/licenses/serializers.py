"""
Serializers for license endpoints.
"""

from rest_framework import serializers


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for issue license request."""

    subscription_id = serializers.UUIDField()
    license_key = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )
    status = serializers.ChoiceField(choices=["active", "pending"], default="active")
    activation_date = serializers.DateField(required=False, allow_null=True)
    expiration_date = serializers.DateField(required=False, allow_null=True)

    def validate_license_key(self, value):
        """Treat blank keys as absent."""
        if value is None:
            return None
        return value.strip() or None


class LicenseSerializer(serializers.Serializer):
    """Serializer for the License entity."""

    id = serializers.UUIDField()
    subscription_id = serializers.UUIDField()
    client_id = serializers.UUIDField(allow_null=True)
    license_key = serializers.CharField()
    status = serializers.CharField(source="status.value")
    activation_date = serializers.DateField()
    expiration_date = serializers.DateField()
    last_checked = serializers.DateField(allow_null=True)
    notifications_sent = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class ExpireLicensesRequestSerializer(serializers.Serializer):
    """Serializer for expiry sweep request."""

    dry_run = serializers.BooleanField(required=False, default=False)


class ExpirySweepResultSerializer(serializers.Serializer):
    """Serializer for ExpirySweepResult."""

    dry_run = serializers.BooleanField()
    expired_count = serializers.IntegerField()
    expired = serializers.ListField(child=serializers.UUIDField())
    conflicts = serializers.ListField(child=serializers.UUIDField())


class DispatchAlertsRequestSerializer(serializers.Serializer):
    """Serializer for alert dispatch request."""

    days = serializers.IntegerField(required=False, min_value=0)


class AlertDispatchResultSerializer(serializers.Serializer):
    """Serializer for AlertDispatchResult."""

    dispatched = serializers.ListField(child=serializers.UUIDField())
    skipped = serializers.ListField(child=serializers.UUIDField())
    failed = serializers.ListField(child=serializers.UUIDField())


class ExpiringLicenseSerializer(serializers.Serializer):
    """Serializer for an expiration alert record."""

    license_id = serializers.UUIDField()
    license_key = serializers.CharField()
    client_id = serializers.UUIDField()
    company_name = serializers.CharField()
    subscription_id = serializers.UUIDField()
    expiration_date = serializers.DateField()
    expires_in = serializers.IntegerField()
