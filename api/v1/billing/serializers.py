"""
Serializers for invoice and transaction endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import TransactionStatus


def _money_field(**kwargs):
    return serializers.DecimalField(max_digits=10, decimal_places=2, **kwargs)


class CreateInvoiceRequestSerializer(serializers.Serializer):
    """
    Serializer for create invoice request.

    invoice_number is generated when omitted; total_amount is computed
    when omitted and must equal amount + tax when supplied.
    """

    client_id = serializers.UUIDField()
    subscription_id = serializers.UUIDField(required=False, allow_null=True)
    invoice_number = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )
    amount = _money_field(min_value=0)
    tax = _money_field(min_value=0, required=False, default=0)
    total_amount = _money_field(min_value=0, required=False, allow_null=True)
    issue_date = serializers.DateField()
    due_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["due_date"] < attrs["issue_date"]:
            raise serializers.ValidationError(
                {"due_date": "Due date cannot be before issue date"}
            )
        return attrs


class InvoiceSerializer(serializers.Serializer):
    """Serializer for the Invoice entity."""

    id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    subscription_id = serializers.UUIDField(allow_null=True)
    invoice_number = serializers.CharField()
    amount = _money_field(source="amount.amount")
    tax = _money_field(source="tax.amount")
    total_amount = _money_field(source="total_amount.amount")
    issue_date = serializers.DateField()
    due_date = serializers.DateField()
    is_paid = serializers.BooleanField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class RecordTransactionRequestSerializer(serializers.Serializer):
    """Serializer for record transaction request."""

    client_id = serializers.UUIDField()
    invoice_id = serializers.UUIDField(required=False, allow_null=True)
    amount = _money_field(min_value=0)
    status = serializers.ChoiceField(
        choices=[s.value for s in TransactionStatus], default=TransactionStatus.PENDING.value
    )
    payment_method = serializers.CharField(max_length=50)
    transaction_date = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class TransactionSerializer(serializers.Serializer):
    """Serializer for the Transaction entity."""

    id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    invoice_id = serializers.UUIDField(allow_null=True)
    amount = _money_field(source="amount.amount")
    status = serializers.CharField(source="status.value")
    payment_method = serializers.CharField()
    transaction_date = serializers.DateTimeField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()


class TransactionSummarySerializer(serializers.Serializer):
    """Serializer for a transaction listed with its client's company name."""

    id = serializers.UUIDField(source="transaction.id")
    client_id = serializers.UUIDField(source="transaction.client_id")
    company_name = serializers.CharField()
    amount = _money_field(source="transaction.amount.amount")
    status = serializers.CharField(source="transaction.status.value")
    payment_method = serializers.CharField(source="transaction.payment_method")
    transaction_date = serializers.DateTimeField(source="transaction.transaction_date")
