"""
Serializers for backoffice API endpoints (admins).
"""

from rest_framework import serializers

from core.domain.value_objects import LicenseStatus, PaymentMethodType


class RequestDecisionInputSerializer(serializers.Serializer):
    """Serializer for an admin decision on a license request."""

    action = serializers.CharField(max_length=20)
    expiry_date = serializers.DateTimeField(required=False, allow_null=True)
    admin_notes = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class PaymentDecisionInputSerializer(serializers.Serializer):
    """Serializer for an admin decision on a payment."""

    action = serializers.CharField(max_length=20)
    expiry_date = serializers.DateTimeField(required=False, allow_null=True)
    reason = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class IssueLicenseSerializer(serializers.Serializer):
    """Serializer for direct license issuance."""

    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    account_ids = serializers.ListField(child=serializers.CharField(max_length=32))
    expiry_date = serializers.DateTimeField()
    metadata = serializers.DictField(required=False)


class UpdateLicenseSerializer(serializers.Serializer):
    """Serializer for license changes; omitted fields stay unchanged."""

    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    account_ids = serializers.ListField(
        child=serializers.CharField(max_length=32), required=False
    )
    expiry_date = serializers.DateTimeField(required=False)
    status = serializers.ChoiceField(
        choices=[s.value for s in LicenseStatus], required=False
    )
    metadata = serializers.DictField(required=False)


class SubscriptionPlanInputSerializer(serializers.Serializer):
    """Serializer for creating or changing a subscription plan."""

    name = serializers.CharField(max_length=100)
    duration_months = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class PaymentMethodInputSerializer(serializers.Serializer):
    """Serializer for creating or changing a payment method."""

    name = serializers.CharField(max_length=100)
    method_type = serializers.ChoiceField(choices=[t.value for t in PaymentMethodType])
    details = serializers.DictField(required=False)
    instructions = serializers.CharField(allow_blank=True)
    is_active = serializers.BooleanField(required=False)
