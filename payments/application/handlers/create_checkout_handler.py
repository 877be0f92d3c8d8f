"""
CreateCheckoutHandler.

Handles the create checkout command.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlencode

from core.domain.exceptions import ServiceConfigurationError
from core.domain.value_objects import KeyType
from core.metrics import checkouts_created_total
from payments.application.commands.create_checkout import CreateCheckoutCommand
from payments.application.dto.payment_dto import CheckoutDTO
from payments.domain.checkout import CheckoutRequest, parse_purchasable_license_type
from payments.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class CreateCheckoutHandler:
    """Handler for CreateCheckoutCommand."""

    def __init__(
        self,
        payment_gateway: PaymentGateway,
        trial_product_id: Optional[str],
        lifetime_product_id: Optional[str],
        app_url: Optional[str],
    ):
        """
        Initialize handler.

        Args:
            payment_gateway: Gateway creating hosted checkouts
            trial_product_id: Provider product sold as a trial
            lifetime_product_id: Provider product sold as a lifetime license
            app_url: Public site URL the customer returns to
        """
        self.payment_gateway = payment_gateway
        self.product_ids = {
            KeyType.TRIAL: trial_product_id,
            KeyType.LIFETIME: lifetime_product_id,
        }
        self.app_url = (app_url or "").rstrip("/")

    async def handle(self, command: CreateCheckoutCommand) -> CheckoutDTO:
        """
        Handle create checkout command.

        Args:
            command: CreateCheckoutCommand

        Returns:
            CheckoutDTO with the hosted checkout URL

        Raises:
            DomainException: If the license type cannot be purchased
            ServiceConfigurationError: If products or the app URL are not configured
            UpstreamServiceError: If the payment provider fails
        """
        license_type = parse_purchasable_license_type(command.license_type)

        if not all(self.product_ids.values()) or not self.app_url:
            logger.error(
                "Missing payment configuration",
                extra={
                    "trial_product_id": bool(self.product_ids[KeyType.TRIAL]),
                    "lifetime_product_id": bool(self.product_ids[KeyType.LIFETIME]),
                    "app_url": bool(self.app_url),
                },
            )
            raise ServiceConfigurationError("Payment service not configured")

        user_id = str(command.user_id)
        success_query = urlencode(
            {"payment": "success", "userId": user_id, "licenseType": license_type.value}
        )
        request = CheckoutRequest(
            product_id=self.product_ids[license_type],
            success_url=f"{self.app_url}/dashboard?{success_query}",
            cancel_url=f"{self.app_url}/dashboard?payment=cancelled",
            metadata={
                "userId": user_id,
                "licenseType": license_type.value,
                "timestamp": datetime.now(timezone.utc)
                .isoformat(timespec="milliseconds")
                .replace("+00:00", "Z"),
            },
        )

        session = await self.payment_gateway.create_checkout(request)
        checkouts_created_total.labels(license_type=license_type.value).inc()
        logger.info(
            "Checkout created",
            extra={
                "user_id": user_id,
                "license_type": license_type.value,
                "checkout_id": session.checkout_id,
            },
        )
        return CheckoutDTO(checkout_url=session.checkout_url, checkout_id=session.checkout_id)
