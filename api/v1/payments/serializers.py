"""
Serializers for Payments API endpoints.
"""

from rest_framework import serializers


class CreateCheckoutRequestSerializer(serializers.Serializer):
    """Serializer for create checkout request."""

    license_type = serializers.ChoiceField(
        choices=["trial", "lifetime"], required=False, default="lifetime"
    )


class CheckoutResponseSerializer(serializers.Serializer):
    """Serializer for CheckoutDTO."""

    checkout_url = serializers.URLField()
    checkout_id = serializers.CharField()
    success = serializers.BooleanField()


class WebhookAcknowledgementSerializer(serializers.Serializer):
    """Serializer for webhook acknowledgements."""

    received = serializers.BooleanField()
    error = serializers.CharField(required=False)
    details = serializers.CharField(required=False)
