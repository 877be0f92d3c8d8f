"""
Unit tests for webhook signature verification.
"""

import hashlib
import hmac

import pytest

from payments.domain.webhook_signature import WebhookSignatureVerifier

SECRET = "whsec_test"
PAYLOAD = b'{"type":"checkout.completed","data":{"id":"chk_1"}}'


class TestWebhookSignatureVerifier:
    """Tests for WebhookSignatureVerifier."""

    def test_generate_signature_is_hmac_sha256_hex(self):
        """Test the signature matches a plain HMAC-SHA256 digest."""
        expected = hmac.new(SECRET.encode(), PAYLOAD, hashlib.sha256).hexdigest()

        assert WebhookSignatureVerifier.generate_signature(PAYLOAD, SECRET) == expected
        assert WebhookSignatureVerifier.generate_signature(PAYLOAD.decode(), SECRET) == expected

    def test_valid_signature(self):
        """Test a correct signature verifies."""
        signature = WebhookSignatureVerifier.generate_signature(PAYLOAD, SECRET)

        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, signature, SECRET) is True

    def test_signature_is_case_and_whitespace_tolerant(self):
        """Test uppercase hex with surrounding whitespace still verifies."""
        signature = WebhookSignatureVerifier.generate_signature(PAYLOAD, SECRET)

        assert WebhookSignatureVerifier.verify_signature(
            PAYLOAD, f" {signature.upper()}\n", SECRET
        ) is True

    def test_tampered_payload(self):
        """Test a modified body fails verification."""
        signature = WebhookSignatureVerifier.generate_signature(PAYLOAD, SECRET)

        assert WebhookSignatureVerifier.verify_signature(
            PAYLOAD.replace(b"chk_1", b"chk_2"), signature, SECRET
        ) is False

    def test_wrong_secret(self):
        """Test a signature made with another secret fails."""
        signature = WebhookSignatureVerifier.generate_signature(PAYLOAD, "other")

        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, signature, SECRET) is False

    def test_missing_secret_or_signature(self):
        """Test verification fails closed without a secret or signature."""
        signature = WebhookSignatureVerifier.generate_signature(PAYLOAD, SECRET)

        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, signature, None) is False
        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, signature, "") is False
        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, None, SECRET) is False
        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, "", SECRET) is False

    @pytest.mark.parametrize("signature", ["é", "\xe9" * 64, "ü" + "0" * 63])
    def test_non_ascii_signature(self, signature):
        """Test a non-ASCII signature header is rejected instead of raising."""
        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, signature, SECRET) is False
