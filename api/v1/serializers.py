"""
Response serializers shared by the portal and backoffice APIs.
"""

from rest_framework import serializers


class SubscriptionPlanSerializer(serializers.Serializer):
    """Serializer for SubscriptionPlanDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    duration_months = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    description = serializers.CharField()
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class PaymentMethodSerializer(serializers.Serializer):
    """Serializer for PaymentMethodDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    method_type = serializers.CharField()
    details = serializers.DictField()
    instructions = serializers.CharField()
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    full_name = serializers.CharField()
    account_ids = serializers.ListField(child=serializers.CharField())
    expires_at = serializers.DateTimeField()
    status = serializers.CharField()
    is_active = serializers.BooleanField()
    is_expired = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    request_id = serializers.UUIDField(allow_null=True)
    metadata = serializers.DictField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseRequestSerializer(serializers.Serializer):
    """Serializer for LicenseRequestDTO."""

    id = serializers.UUIDField()
    user_id = serializers.IntegerField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    account_ids = serializers.ListField(child=serializers.CharField())
    reason = serializers.CharField()
    status = serializers.CharField()
    subscription_plan_id = serializers.UUIDField(allow_null=True)
    payment_id = serializers.UUIDField(allow_null=True)
    admin_notes = serializers.CharField()
    approved_by = serializers.IntegerField(allow_null=True)
    approved_at = serializers.DateTimeField(allow_null=True)
    rejected_by = serializers.IntegerField(allow_null=True)
    rejected_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class PaymentSerializer(serializers.Serializer):
    """Serializer for PaymentDTO."""

    id = serializers.UUIDField()
    user_id = serializers.IntegerField()
    license_request_id = serializers.UUIDField(allow_null=True)
    subscription_plan_id = serializers.UUIDField()
    payment_method_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    proof = serializers.CharField()
    transaction_reference = serializers.CharField()
    status = serializers.CharField()
    verified_by = serializers.IntegerField(allow_null=True)
    verified_at = serializers.DateTimeField(allow_null=True)
    rejection_reason = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class RequestDecisionSerializer(serializers.Serializer):
    """Serializer for RequestDecisionDTO."""

    request = LicenseRequestSerializer()
    license = LicenseSerializer(allow_null=True)


class PaymentDecisionSerializer(serializers.Serializer):
    """Serializer for PaymentDecisionDTO."""

    payment = PaymentSerializer()
    request = LicenseRequestSerializer(allow_null=True)
    license = LicenseSerializer(allow_null=True)
