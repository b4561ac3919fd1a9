"""
Serializers for ticket endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import TicketPriority, TicketStatus

PRIORITIES = [p.value for p in TicketPriority]
STATUSES = [s.value for s in TicketStatus]


class CreateTicketRequestSerializer(serializers.Serializer):
    """Serializer for create ticket request. Client callers may omit client_id."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    priority = serializers.ChoiceField(choices=PRIORITIES, default=TicketPriority.MEDIUM.value)
    client_id = serializers.UUIDField(required=False, allow_null=True)


class UpdateTicketRequestSerializer(serializers.Serializer):
    """
    Serializer for ticket update.

    Sending assigned_to as null unassigns the ticket.
    """

    status = serializers.ChoiceField(choices=STATUSES, required=False)
    priority = serializers.ChoiceField(choices=PRIORITIES, required=False)
    assigned_to = serializers.UUIDField(required=False, allow_null=True)


class TicketSerializer(serializers.Serializer):
    """Serializer for the Ticket entity."""

    id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    title = serializers.CharField()
    description = serializers.CharField()
    status = serializers.CharField(source="status.value")
    priority = serializers.CharField(source="priority.value")
    assigned_to = serializers.UUIDField(allow_null=True)
    closed_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
