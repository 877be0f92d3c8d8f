"""
Payment gateway wiring.
"""

from typing import Optional

from django.conf import settings

from core.domain.exceptions import ServiceConfigurationError
from payments.ports.payment_gateway import PaymentGateway

_payment_gateway: Optional[PaymentGateway] = None


def get_payment_gateway() -> PaymentGateway:
    """
    Return the process-wide payment gateway.

    Raises:
        ServiceConfigurationError: If the Polar access token is missing
    """
    global _payment_gateway
    if _payment_gateway is None:
        from payments.infrastructure.polar_payment_gateway import PolarPaymentGateway

        if not settings.POLAR_ACCESS_TOKEN:
            raise ServiceConfigurationError("Payment service not configured")
        _payment_gateway = PolarPaymentGateway(
            access_token=settings.POLAR_ACCESS_TOKEN,
            timeout_seconds=settings.EXTERNAL_HTTP_TIMEOUT_SECONDS,
        )
    return _payment_gateway


def set_payment_gateway(gateway: Optional[PaymentGateway]) -> None:
    """Replace the process-wide payment gateway (None resets to settings)."""
    global _payment_gateway
    _payment_gateway = gateway
