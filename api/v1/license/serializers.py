"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class ClaimTrialResponseSerializer(serializers.Serializer):
    """Serializer for claim trial response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    license_key = serializers.CharField(required=False)


class LicenseRecordSerializer(serializers.Serializer):
    """Serializer for LicenseRecordDTO."""

    license_key = serializers.CharField()
    key_type = serializers.CharField()
    created_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField(allow_null=True)
    is_activated = serializers.BooleanField()
    is_expired = serializers.BooleanField()
    days_remaining = serializers.IntegerField(allow_null=True)


class LicenseOverviewSerializer(serializers.Serializer):
    """Serializer for LicenseOverviewDTO."""

    user_id = serializers.UUIDField()
    subscription_type = serializers.CharField()
    license = LicenseRecordSerializer(allow_null=True)


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    license_key = serializers.CharField(required=True, max_length=255)


class LicenseInfoSerializer(serializers.Serializer):
    """Serializer for the information decoded from a valid key."""

    type = serializers.CharField()
    type_name = serializers.CharField()
    days = serializers.IntegerField()
    is_lifetime = serializers.BooleanField()
    recordings = serializers.IntegerField(allow_null=True)
    key = serializers.CharField()


class ValidateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for LicenseValidationDTO."""

    is_valid = serializers.BooleanField()
    license = LicenseInfoSerializer(required=False)
    reason = serializers.CharField(required=False)
