"""
Serializers for the MT5 Expert Advisor endpoints.
"""

from rest_framework import serializers


class ValidateAccountSerializer(serializers.Serializer):
    """Serializer for an account validation call."""

    account_id = serializers.CharField(max_length=32)

    def to_internal_value(self, data):
        # The EA may send the account number as a JSON integer.
        if isinstance(data, dict) and isinstance(data.get("account_id"), int):
            data = {**data, "account_id": str(data["account_id"])}
        return super().to_internal_value(data)


class ValidatedLicenseSerializer(serializers.Serializer):
    """Serializer for AccountValidationDTO in the EA's camelCase shape."""

    licenseKey = serializers.CharField(source="license_key")
    firstName = serializers.CharField(source="first_name")
    lastName = serializers.CharField(source="last_name")
    fullName = serializers.CharField(source="full_name")
    expiryDate = serializers.DateTimeField(source="expiry_date")
    isActive = serializers.BooleanField(source="is_active")
    isExpired = serializers.BooleanField(source="is_expired")
    status = serializers.CharField()
    daysRemaining = serializers.IntegerField(source="days_remaining")
    accountIds = serializers.ListField(child=serializers.CharField(), source="account_ids")
