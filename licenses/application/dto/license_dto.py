"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class IssuedLicenseDTO:
    """DTO for a newly issued license."""

    success: bool
    message: str
    license_key: str
    key_type: str
    expires_at: Optional[datetime]


@dataclass
class LicenseRecordDTO:
    """DTO for a stored license with its computed expiry state."""

    license_key: str
    key_type: str
    created_at: datetime
    expires_at: Optional[datetime]
    is_activated: bool
    is_expired: bool
    days_remaining: Optional[int]  # None for lifetime licenses


@dataclass
class LicenseOverviewDTO:
    """DTO for the license overview of a user."""

    user_id: uuid.UUID
    subscription_type: str
    license: Optional[LicenseRecordDTO]


@dataclass
class LicenseValidationDTO:
    """DTO for a key validation result."""

    is_valid: bool
    license: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
