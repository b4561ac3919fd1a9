"""
Serializers for subscription endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import SubscriptionType

SUBSCRIPTION_TYPES = [t.value for t in SubscriptionType]


class CreateSubscriptionRequestSerializer(serializers.Serializer):
    """Serializer for create subscription request."""

    client_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    subscription_type = serializers.ChoiceField(choices=SUBSCRIPTION_TYPES)
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    auto_renew = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        end_date = attrs.get("end_date")
        if end_date is not None and end_date <= attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date"})
        return attrs


class UpdateSubscriptionRequestSerializer(serializers.Serializer):
    """Serializer for partial subscription update."""

    subscription_type = serializers.ChoiceField(choices=SUBSCRIPTION_TYPES, required=False)
    end_date = serializers.DateField(required=False)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    auto_renew = serializers.BooleanField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class SubscriptionSerializer(serializers.Serializer):
    """Serializer for the Subscription entity."""

    id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    subscription_type = serializers.CharField(source="subscription_type.value")
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="price.amount")
    auto_renew = serializers.BooleanField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
