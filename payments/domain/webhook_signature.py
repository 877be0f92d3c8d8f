"""
Webhook signature verification.

Payment provider webhooks are signed with HMAC-SHA256 over the raw
request body, hex encoded.
"""

import hashlib
import hmac
import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)


class WebhookSignatureVerifier:
    """Domain service for signing and verifying webhook payloads."""

    @staticmethod
    def generate_signature(payload: Union[bytes, str], secret: str) -> str:
        """
        Generate HMAC signature for webhook payload.

        Args:
            payload: Raw request body
            secret: Webhook secret

        Returns:
            HMAC SHA-256 signature (hex)
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()

    @staticmethod
    def verify_signature(
        payload: Union[bytes, str], signature: Optional[str], secret: Optional[str]
    ) -> bool:
        """
        Verify webhook signature in constant time.

        Args:
            payload: Raw request body
            signature: Signature sent by the provider
            secret: Webhook secret

        Returns:
            True if signature is valid; False when no secret is configured
        """
        if not secret:
            logger.error("Webhook secret not configured")
            return False
        if not signature:
            return False
        expected_signature = WebhookSignatureVerifier.generate_signature(payload, secret)
        # Header values may hold any latin-1 text; compare bytes so they cannot raise
        return hmac.compare_digest(
            expected_signature.encode("ascii"), signature.strip().lower().encode("utf-8")
        )
