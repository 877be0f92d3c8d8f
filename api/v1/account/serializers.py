"""
Serializers for Account API endpoints.
"""

from rest_framework import serializers


class SignupRequestSerializer(serializers.Serializer):
    """Serializer for sign-up request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True, min_length=6, write_only=True, trim_whitespace=False
    )


class SignupResponseSerializer(serializers.Serializer):
    """Serializer for RegisteredAccountDTO."""

    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    message = serializers.CharField()
