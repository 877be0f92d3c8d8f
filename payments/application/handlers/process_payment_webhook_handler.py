"""
ProcessPaymentWebhookHandler.

Handles webhook deliveries from the payment provider. Once the signature
is verified the delivery is always acknowledged, so the provider does
not retry; failures are logged for manual review instead.
"""

import json
import logging
from typing import Callable, Optional

from core.domain.exceptions import DomainException, InvalidWebhookSignatureError
from core.metrics import payment_webhooks_total
from licenses.application.commands.claim_trial import ClaimTrialCommand
from licenses.application.commands.issue_paid_license import IssuePaidLicenseCommand
from licenses.application.handlers.claim_trial_handler import ClaimTrialHandler
from licenses.application.handlers.issue_paid_license_handler import IssuePaidLicenseHandler
from payments.application.commands.process_payment_webhook import ProcessPaymentWebhookCommand
from payments.application.dto.payment_dto import WebhookOutcomeDTO
from payments.domain.webhook_event import (
    CHECKOUT_COMPLETED,
    CHECKOUT_EXPIRED,
    PaymentWebhookEvent,
)
from payments.domain.webhook_signature import WebhookSignatureVerifier

logger = logging.getLogger(__name__)


class ProcessPaymentWebhookHandler:
    """Handler for ProcessPaymentWebhookCommand."""

    def __init__(
        self,
        webhook_secret: Optional[str],
        claim_trial_handler_factory: Callable[[], ClaimTrialHandler],
        issue_paid_license_handler_factory: Callable[[], IssuePaidLicenseHandler],
    ):
        """
        Initialize handler.

        License handlers are built only for completed checkouts, after the
        signature check, so a misconfigured identity provider cannot turn a
        forged delivery into anything but a 401.

        Args:
            webhook_secret: Shared signing secret
            claim_trial_handler_factory: Builds the trial license handler
            issue_paid_license_handler_factory: Builds the lifetime license handler
        """
        self.webhook_secret = webhook_secret
        self.claim_trial_handler_factory = claim_trial_handler_factory
        self.issue_paid_license_handler_factory = issue_paid_license_handler_factory

    async def handle(self, command: ProcessPaymentWebhookCommand) -> WebhookOutcomeDTO:
        """
        Handle process payment webhook command.

        Args:
            command: ProcessPaymentWebhookCommand

        Returns:
            WebhookOutcomeDTO with the acknowledgement status and body

        Raises:
            InvalidWebhookSignatureError: If the signature is missing or wrong
        """
        if not command.signature:
            logger.warning("Webhook received without signature")
            payment_webhooks_total.labels(event_type="unknown", outcome="rejected").inc()
            raise InvalidWebhookSignatureError("Missing signature")

        if not WebhookSignatureVerifier.verify_signature(
            command.payload, command.signature, self.webhook_secret
        ):
            logger.warning("Webhook signature verification failed")
            payment_webhooks_total.labels(event_type="unknown", outcome="rejected").inc()
            raise InvalidWebhookSignatureError()

        event_type = "unknown"
        try:
            payload = json.loads(command.payload)
            if not isinstance(payload, dict):
                raise ValueError("Webhook body is not a JSON object")
            event = PaymentWebhookEvent.from_payload(payload)
            event_type = event.event_type or "unknown"
            logger.info("Processing payment webhook event: %s", event_type)

            if event.event_type == CHECKOUT_COMPLETED:
                outcome = await self._handle_checkout_completed(event)
            else:
                if event.event_type == CHECKOUT_EXPIRED:
                    logger.info("Checkout expired: %s", event.checkout_id)
                outcome = WebhookOutcomeDTO(status_code=200)
        except Exception as e:  # pylint: disable=broad-exception-caught
            # Acknowledge anyway so the provider does not retry
            logger.exception("Webhook processing error")
            outcome = WebhookOutcomeDTO(
                status_code=200,
                body={"error": "Webhook processing failed", "received": True, "details": str(e)},
            )
            payment_webhooks_total.labels(event_type=event_type, outcome="error").inc()
            return outcome

        payment_webhooks_total.labels(
            event_type=event_type, outcome=str(outcome.status_code)
        ).inc()
        return outcome

    async def _handle_checkout_completed(self, event: PaymentWebhookEvent) -> WebhookOutcomeDTO:
        user_id = event.parsed_user_id()
        if not user_id:
            logger.error(
                "Checkout completed but userId missing in metadata",
                extra={"checkout_id": event.checkout_id},
            )
            return WebhookOutcomeDTO(
                status_code=400,
                body={"error": "Missing userId in metadata", "received": True},
            )

        logger.info(
            "Processing payment for user %s, type: %s",
            user_id,
            event.license_type,
            extra={"checkout_id": event.checkout_id},
        )
        try:
            if event.license_type == "trial":
                handler = self.claim_trial_handler_factory()
                await handler.handle(ClaimTrialCommand(user_id=user_id))
            else:
                await self.issue_paid_license_handler_factory().handle(
                    IssuePaidLicenseCommand(user_id=user_id, checkout_id=event.checkout_id)
                )
        except DomainException as e:
            logger.error(
                "License generation failed after payment: %s",
                e.message,
                extra={"user_id": str(user_id), "checkout_id": event.checkout_id},
            )
            return WebhookOutcomeDTO(
                status_code=202,
                body={
                    "error": "License generation failed but webhook acknowledged",
                    "received": True,
                    "details": e.message,
                },
            )

        return WebhookOutcomeDTO(status_code=200)
