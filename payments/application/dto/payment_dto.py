"""
Payment DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CheckoutDTO:
    """DTO for a created checkout."""

    checkout_url: str
    checkout_id: str
    success: bool = True


@dataclass
class WebhookOutcomeDTO:
    """DTO for a processed webhook: the status and body to acknowledge with."""

    status_code: int
    body: Dict[str, Any] = field(default_factory=lambda: {"received": True})
