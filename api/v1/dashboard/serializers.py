"""
Serializers for dashboard endpoints.
"""

from rest_framework import serializers


class DashboardStatsSerializer(serializers.Serializer):
    """Serializer for DashboardStatsDTO."""

    total_clients = serializers.IntegerField()
    active_licenses = serializers.IntegerField()
    open_tickets = serializers.IntegerField()
    monthly_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    failed = serializers.ListField(child=serializers.CharField())


class RecentTicketSerializer(serializers.Serializer):
    """Serializer for a ticket listed with its client and assignee names."""

    id = serializers.UUIDField(source="ticket.id")
    client_id = serializers.UUIDField(source="ticket.client_id")
    company_name = serializers.CharField()
    title = serializers.CharField(source="ticket.title")
    status = serializers.CharField(source="ticket.status.value")
    priority = serializers.CharField(source="ticket.priority.value")
    assigned_to = serializers.UUIDField(source="ticket.assigned_to", allow_null=True)
    assignee_name = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(source="ticket.created_at")
