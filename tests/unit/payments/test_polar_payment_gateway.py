"""
Unit tests for PolarPaymentGateway.
"""

import pytest
import requests
from asgiref.sync import async_to_sync

from core.domain.exceptions import UpstreamServiceError
from payments.domain.checkout import CheckoutRequest
from payments.infrastructure import polar_payment_gateway as module
from payments.infrastructure.polar_payment_gateway import PolarPaymentGateway

CHECKOUT_REQUEST = CheckoutRequest(
    product_id="prod_lifetime",
    success_url="https://viberyt.test/dashboard?payment=success",
    cancel_url="https://viberyt.test/dashboard?payment=cancelled",
    metadata={"userId": "u-1", "licenseType": "lifetime"},
)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text
        self.ok = status_code < 400

    def json(self):
        return self._payload


@pytest.fixture
def gateway():
    """Fixture for PolarPaymentGateway."""
    return PolarPaymentGateway("polar-token", api_url="https://polar.test/v1/", timeout_seconds=4)


class TestPolarPaymentGateway:
    """Tests for PolarPaymentGateway."""

    def test_create_checkout(self, gateway, monkeypatch):
        """Test the request body and the parsed session."""
        calls = []

        def _post(url, **kwargs):
            calls.append((url, kwargs))
            return FakeResponse(
                201, {"id": "chk_42", "checkout_url": "https://polar.test/checkout/chk_42"}
            )

        monkeypatch.setattr(module.requests, "post", _post)

        session = async_to_sync(gateway.create_checkout)(CHECKOUT_REQUEST)

        assert session.checkout_id == "chk_42"
        assert session.checkout_url == "https://polar.test/checkout/chk_42"
        url, kwargs = calls[0]
        assert url == "https://polar.test/v1/checkouts"
        assert kwargs["headers"]["Authorization"] == "Bearer polar-token"
        assert kwargs["timeout"] == 4
        assert kwargs["json"] == {
            "product_id": "prod_lifetime",
            "success_url": CHECKOUT_REQUEST.success_url,
            "cancel_url": CHECKOUT_REQUEST.cancel_url,
            "customer_email_optional": False,
            "metadata": {"userId": "u-1", "licenseType": "lifetime"},
        }

    def test_provider_error(self, gateway, monkeypatch):
        """Test non-2xx responses become upstream errors."""
        monkeypatch.setattr(
            module.requests, "post", lambda url, **kwargs: FakeResponse(422, text="bad product")
        )

        with pytest.raises(UpstreamServiceError, match="Failed to create checkout"):
            async_to_sync(gateway.create_checkout)(CHECKOUT_REQUEST)

    def test_network_error(self, gateway, monkeypatch):
        """Test network failures become upstream errors."""

        def _post(url, **kwargs):
            raise requests.exceptions.Timeout("timed out")

        monkeypatch.setattr(module.requests, "post", _post)

        with pytest.raises(UpstreamServiceError):
            async_to_sync(gateway.create_checkout)(CHECKOUT_REQUEST)
