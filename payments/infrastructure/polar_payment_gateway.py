"""
Polar implementation of the PaymentGateway port.
"""

import logging

import requests
from asgiref.sync import sync_to_async

from core.domain.exceptions import UpstreamServiceError
from payments.domain.checkout import CheckoutRequest, CheckoutSession
from payments.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)

POLAR_API_URL = "https://api.polar.sh/v1"


class PolarPaymentGateway(PaymentGateway):
    """Creates Polar checkouts through the REST API."""

    def __init__(
        self, access_token: str, api_url: str = POLAR_API_URL, timeout_seconds: float = 10
    ):
        """
        Initialize gateway.

        Args:
            access_token: Polar organization access token
            api_url: Polar API base URL
            timeout_seconds: HTTP timeout per request
        """
        self.access_token = access_token
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    @sync_to_async
    def create_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        """
        Create a Polar checkout.

        Args:
            request: Product, redirect URLs and metadata

        Returns:
            CheckoutSession with the hosted checkout URL
        """
        try:
            response = requests.post(
                f"{self.api_url}/checkouts",
                json={
                    "product_id": request.product_id,
                    "success_url": request.success_url,
                    "cancel_url": request.cancel_url,
                    "customer_email_optional": False,
                    "metadata": request.metadata,
                },
                headers={
                    "Authorization": f"Bearer {self.access_token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Polar API unreachable: %s", e)
            raise UpstreamServiceError("Failed to create checkout with payment provider") from e

        if not response.ok:
            logger.error("Polar API error: %s %s", response.status_code, response.text[:500])
            raise UpstreamServiceError("Failed to create checkout with payment provider")

        checkout = response.json()
        return CheckoutSession(checkout_url=checkout["checkout_url"], checkout_id=checkout["id"])
