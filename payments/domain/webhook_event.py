"""
Payment webhook event.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

CHECKOUT_COMPLETED = "checkout.completed"
CHECKOUT_EXPIRED = "checkout.expired"


@dataclass(frozen=True)
class PaymentWebhookEvent:
    """A parsed webhook delivery from the payment provider."""

    event_type: str
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PaymentWebhookEvent":
        """Build an event from the decoded JSON body."""
        data = payload.get("data")
        return cls(
            event_type=str(payload.get("type") or ""),
            data=data if isinstance(data, dict) else {},
        )

    @property
    def checkout_id(self) -> Optional[str]:
        return self.data.get("id")

    @property
    def metadata(self) -> Dict[str, Any]:
        metadata = self.data.get("metadata")
        return metadata if isinstance(metadata, dict) else {}

    @property
    def user_id(self) -> Optional[str]:
        return self.metadata.get("userId") or None

    @property
    def license_type(self) -> str:
        """License type chosen at checkout; lifetime unless stated."""
        return self.metadata.get("licenseType") or "lifetime"

    def parsed_user_id(self) -> Optional[uuid.UUID]:
        """
        Parse the user id from the metadata.

        Returns:
            UUID, or None if missing or malformed
        """
        try:
            return uuid.UUID(str(self.user_id)) if self.user_id else None
        except ValueError:
            return None
