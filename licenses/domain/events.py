"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseKeyIssued(DomainEvent):
    """Event raised when a license key is generated and stored for a user."""

    def __init__(
        self,
        license_record_id: uuid.UUID,
        user_id: uuid.UUID,
        key_type: str,
        license_key: str,
        customer_email: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseKeyIssued event.

        Args:
            license_record_id: License record UUID
            user_id: Owner user UUID
            key_type: Stored key type (trial, lifetime, demo)
            license_key: The issued key string
            customer_email: Email the key should be delivered to
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_record_id),
            event_type="LicenseKeyIssued",
        )
        self.license_record_id = license_record_id
        self.user_id = user_id
        self.key_type = key_type
        self.license_key = license_key
        self.customer_email = customer_email

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary, without the key itself."""
        data = super().to_dict()
        data.update(
            {
                "license_record_id": str(self.license_record_id),
                "user_id": str(self.user_id),
                "key_type": self.key_type,
                "customer_email": self.customer_email,
            }
        )
        return data
