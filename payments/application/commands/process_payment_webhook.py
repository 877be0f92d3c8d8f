"""
ProcessPaymentWebhookCommand.

Command carrying a raw webhook delivery from the payment provider.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ProcessPaymentWebhookCommand:
    """
    Command to process a payment webhook.

    The payload must be the raw body; the signature covers its exact bytes.
    """

    payload: bytes
    signature: Optional[str]
