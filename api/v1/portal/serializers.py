"""
Serializers for portal API endpoints (end users).
"""

from rest_framework import serializers


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for a new license request."""

    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    account_ids = serializers.ListField(child=serializers.CharField(max_length=32))
    reason = serializers.CharField(max_length=2000)
    subscription_plan_id = serializers.UUIDField(required=False, allow_null=True)


class EditLicenseRequestSerializer(serializers.Serializer):
    """Serializer for an owner edit; omitted fields stay unchanged."""

    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    account_ids = serializers.ListField(
        child=serializers.CharField(max_length=32), required=False
    )
    reason = serializers.CharField(max_length=2000, required=False)


class SubmitPaymentSerializer(serializers.Serializer):
    """Serializer for a payment submission."""

    subscription_plan_id = serializers.UUIDField()
    payment_method_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)
    proof = serializers.CharField(max_length=10000)
    transaction_reference = serializers.CharField(
        max_length=255, required=False, allow_blank=True
    )
