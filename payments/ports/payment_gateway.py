"""
Payment gateway port (interface).

Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod

from payments.domain.checkout import CheckoutRequest, CheckoutSession


class PaymentGateway(ABC):
    """Abstract hosted-checkout payment provider."""

    @abstractmethod
    async def create_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        """
        Create a hosted checkout.

        Args:
            request: Product, redirect URLs and metadata

        Returns:
            CheckoutSession with the URL to redirect the customer to

        Raises:
            UpstreamServiceError: If the provider rejects or cannot be reached
        """
        pass
