"""
Serializers for notification endpoints.
"""

from rest_framework import serializers


class NotificationSerializer(serializers.Serializer):
    """Serializer for the Notification entity."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    message = serializers.CharField()
    type = serializers.CharField()
    related_id = serializers.UUIDField(allow_null=True)
    is_read = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class UnreadCountSerializer(serializers.Serializer):
    """Serializer for the unread notification count."""

    unread_count = serializers.IntegerField()
