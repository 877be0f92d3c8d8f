"""
UserProfile domain entity.

A profile mirrors an identity-provider account inside the license
service and records which subscription the user currently holds.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.value_objects import SubscriptionType


@dataclass(frozen=True)
class UserProfile:
    """
    UserProfile domain entity.

    The id is the identity provider's user id.
    """

    id: uuid.UUID
    subscription_type: SubscriptionType
    trial_activated_at: Optional[datetime]
    trial_ends_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate user profile entity."""
        if not self.id:
            raise ValueError("User ID is required")

    @classmethod
    def create(cls, user_id: uuid.UUID) -> "UserProfile":
        """
        Create a new profile without a subscription.

        Args:
            user_id: Identity provider user UUID

        Returns:
            UserProfile entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=user_id,
            subscription_type=SubscriptionType.NONE,
            trial_activated_at=None,
            trial_ends_at=None,
            created_at=now,
            updated_at=now,
        )

    def start_trial(self, days_valid: int, now: Optional[datetime] = None) -> "UserProfile":
        """
        Create a new UserProfile instance with an activated trial.

        Args:
            days_valid: Trial length in days
            now: Activation time (defaults to now)

        Returns:
            New UserProfile instance on the trial subscription
        """
        activated_at = now or datetime.now(timezone.utc)
        return replace(
            self,
            subscription_type=SubscriptionType.TRIAL,
            trial_activated_at=activated_at,
            trial_ends_at=activated_at + timedelta(days=days_valid),
            updated_at=activated_at,
        )

    def upgrade_to_lifetime(self) -> "UserProfile":
        """Create a new UserProfile instance on the lifetime subscription."""
        return replace(
            self,
            subscription_type=SubscriptionType.LIFETIME,
            updated_at=datetime.now(timezone.utc),
        )
