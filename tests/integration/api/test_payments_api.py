"""
Integration tests for Payments API endpoints.
"""

import hashlib
import hmac
import json
import uuid

import pytest
from asgiref.sync import async_to_sync
from django.test import override_settings
from django.urls import reverse

from core.domain.value_objects import KeyType, SubscriptionType

AUTH = {"HTTP_AUTHORIZATION": "Bearer valid-token"}
WEBHOOK_SECRET = "test-webhook-secret"


def _post_webhook(api_client, payload, secret=WEBHOOK_SECRET, signature=None):
    body = json.dumps(payload).encode("utf-8")
    headers = {}
    if secret:
        headers["HTTP_X_POLAR_SIGNATURE"] = signature or hmac.new(
            secret.encode("utf-8"), body, hashlib.sha256
        ).hexdigest()
    return api_client.post(
        reverse("payments:payment-webhook"), body, content_type="application/json", **headers
    )


def _completed(user_id, license_type="lifetime"):
    return {
        "type": "checkout.completed",
        "data": {
            "id": "chk_live_1",
            "metadata": {"userId": str(user_id), "licenseType": license_type},
        },
    }


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateCheckoutAPI:
    """Integration tests for checkout creation."""

    def test_create_lifetime_checkout(
        self, api_client, installed_identity_provider, installed_payment_gateway, account
    ):
        """Test the default checkout sells the lifetime product."""
        response = api_client.post(reverse("payments:create-checkout"), {}, format="json", **AUTH)

        assert response.status_code == 200
        assert response.data == {
            "checkout_url": "https://polar.test/checkout/chk_1",
            "checkout_id": "chk_1",
            "success": True,
        }
        request = installed_payment_gateway.requests[0]
        assert request.product_id == "prod_lifetime"
        assert request.metadata["userId"] == str(account.user_id)
        assert request.success_url.startswith("https://viberyt.test/dashboard?payment=success")

    def test_create_trial_checkout(
        self, api_client, installed_identity_provider, installed_payment_gateway, account
    ):
        """Test trial checkouts use the trial product."""
        response = api_client.post(
            reverse("payments:create-checkout"), {"license_type": "trial"}, format="json", **AUTH
        )

        assert response.status_code == 200
        assert installed_payment_gateway.requests[0].product_id == "prod_trial"

    def test_invalid_license_type(
        self, api_client, installed_identity_provider, installed_payment_gateway, account
    ):
        """Test unsupported license types are rejected."""
        response = api_client.post(
            reverse("payments:create-checkout"), {"license_type": "demo"}, format="json", **AUTH
        )

        assert response.status_code == 400
        assert installed_payment_gateway.requests == []

    @override_settings(POLAR_LIFETIME_PRODUCT_ID=None)
    def test_missing_product_configuration(
        self, api_client, installed_identity_provider, installed_payment_gateway, account
    ):
        """Test missing products are reported as a configuration error."""
        response = api_client.post(reverse("payments:create-checkout"), {}, format="json", **AUTH)

        assert response.status_code == 500
        assert response.data["error"]["code"] == "SERVICE_NOT_CONFIGURED"

    def test_gateway_failure(
        self, api_client, installed_identity_provider, installed_payment_gateway, account
    ):
        """Test payment provider failures are a 500."""
        installed_payment_gateway.fail = True

        response = api_client.post(reverse("payments:create-checkout"), {}, format="json", **AUTH)

        assert response.status_code == 500
        assert response.data["error"]["code"] == "UPSTREAM_SERVICE_ERROR"

    def test_requires_token(self, api_client, installed_identity_provider):
        """Test checkout creation requires a bearer token."""
        response = api_client.post(reverse("payments:create-checkout"), {}, format="json")

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestPaymentWebhookAPI:
    """Integration tests for payment webhooks."""

    def test_missing_signature(self, api_client):
        """Test unsigned deliveries are rejected."""
        response = _post_webhook(api_client, {"type": "checkout.completed"}, secret=None)

        assert response.status_code == 401
        assert response.data["error"]["message"] == "Missing signature"

    def test_invalid_signature(self, api_client):
        """Test deliveries with a wrong signature are rejected."""
        response = _post_webhook(api_client, {"type": "checkout.completed"}, secret="wrong")

        assert response.status_code == 401
        assert response.data["error"]["code"] == "INVALID_SIGNATURE"

    def test_completed_checkout_issues_lifetime_license(
        self,
        api_client,
        installed_identity_provider,
        account,
        user_profile_repository,
        license_record_repository,
    ):
        """Test a completed checkout issues the key and upgrades the profile."""
        response = _post_webhook(api_client, _completed(account.user_id))

        assert response.status_code == 200
        assert response.data == {"received": True}
        records = async_to_sync(license_record_repository.find_for_user)(account.user_id)
        assert [record.key_type for record in records] == [KeyType.LIFETIME]
        profile = async_to_sync(user_profile_repository.find_by_id)(account.user_id)
        assert profile.subscription_type == SubscriptionType.LIFETIME

    def test_completed_trial_checkout(
        self, api_client, installed_identity_provider, account, license_record_repository
    ):
        """Test a completed trial checkout issues a trial key."""
        response = _post_webhook(api_client, _completed(account.user_id, "trial"))

        assert response.status_code == 200
        records = async_to_sync(license_record_repository.find_for_user)(account.user_id)
        assert [record.key_type for record in records] == [KeyType.TRIAL]

    def test_missing_user_id(self, api_client, installed_identity_provider):
        """Test metadata without a user id is a 400 that is still acknowledged."""
        payload = {"type": "checkout.completed", "data": {"id": "chk_1", "metadata": {}}}

        response = _post_webhook(api_client, payload)

        assert response.status_code == 400
        assert response.data == {"error": "Missing userId in metadata", "received": True}

    def test_duplicate_lifetime_is_acknowledged(
        self, api_client, installed_identity_provider, account
    ):
        """Test a repeated delivery is acknowledged with 202."""
        _post_webhook(api_client, _completed(account.user_id))

        response = _post_webhook(api_client, _completed(account.user_id))

        assert response.status_code == 202
        assert response.data["received"] is True
        assert response.data["error"] == "License generation failed but webhook acknowledged"

    def test_unknown_user_is_acknowledged(self, api_client, installed_identity_provider):
        """Test a payment for an unknown user is acknowledged with 202."""
        response = _post_webhook(api_client, _completed(uuid.uuid4()))

        assert response.status_code == 202

    def test_other_events_are_acknowledged(self, api_client):
        """Test events other than completed checkouts are acknowledged."""
        response = _post_webhook(api_client, {"type": "checkout.expired", "data": {"id": "c"}})

        assert response.status_code == 200
        assert response.data == {"received": True}
