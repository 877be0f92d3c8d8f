"""
LicenseRecord domain entity.

A LicenseRecord associates an issued license key with a user. It is
the persisted counterpart of a key; the key string itself is produced
by the license codec and never re-derived from the record.
"""
import math
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import KeyType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LicenseRecord:
    """
    LicenseRecord domain entity.

    ``device_id`` is reserved for device binding and is not enforced.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    license_key: str
    key_type: KeyType
    expires_at: Optional[datetime]
    is_activated: bool
    created_at: datetime
    device_id: Optional[str] = None

    def __post_init__(self):
        """Validate license record entity."""
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.license_key or len(self.license_key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if self.key_type == KeyType.LIFETIME and self.expires_at is not None:
            raise ValueError("Lifetime licenses cannot expire")

    @classmethod
    def create(
        cls,
        user_id: uuid.UUID,
        license_key: str,
        key_type: KeyType,
        days_valid: Optional[int] = None,
        device_id: Optional[str] = None,
        now: Optional[datetime] = None,
        record_id: Optional[uuid.UUID] = None,
    ) -> "LicenseRecord":
        """
        Create a new LicenseRecord entity.

        Args:
            user_id: Owner user UUID
            license_key: Generated license key string
            key_type: Stored key type
            days_valid: Days until expiry (ignored for lifetime licenses)
            device_id: Reserved device identifier
            now: Creation time (defaults to now)
            record_id: Optional UUID (generated if not provided)

        Returns:
            LicenseRecord entity instance
        """
        created_at = now or _utcnow()
        expires_at = None
        if key_type != KeyType.LIFETIME and days_valid and days_valid > 0:
            expires_at = created_at + timedelta(days=days_valid)

        return cls(
            id=record_id or uuid.uuid4(),
            user_id=user_id,
            license_key=license_key,
            key_type=key_type,
            expires_at=expires_at,
            is_activated=False,
            created_at=created_at,
            device_id=device_id,
        )

    def is_active(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check whether the license still grants access.

        Lifetime licenses are always active; others only until expiry.
        """
        if self.key_type == KeyType.LIFETIME:
            return True
        if self.expires_at is None:
            return False
        return self.expires_at > (current_time or _utcnow())

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Check whether the expiry date has passed."""
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or _utcnow())

    def days_remaining(self, current_time: Optional[datetime] = None) -> Optional[int]:
        """
        Whole days until expiry, rounded up and never negative.

        Returns:
            Remaining days, or None for licenses without an expiry
        """
        if self.expires_at is None:
            return None
        remaining = self.expires_at - (current_time or _utcnow())
        return max(0, math.ceil(remaining.total_seconds() / 86400))

    def mark_activated(self, device_id: Optional[str] = None) -> "LicenseRecord":
        """Return a copy flagged as activated."""
        return replace(self, is_activated=True, device_id=device_id or self.device_id)

    def summary(self) -> Dict[str, Any]:
        """Compact view of the record used in conflict responses."""
        return {
            "license_key": self.license_key,
            "key_type": self.key_type.value,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "is_activated": self.is_activated,
        }
