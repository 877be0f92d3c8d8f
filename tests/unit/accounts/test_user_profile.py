"""
Unit tests for UserProfile entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from accounts.domain.user_profile import UserProfile
from core.domain.value_objects import SubscriptionType


class TestUserProfile:
    """Tests for UserProfile entity."""

    def test_create_profile(self):
        """Test a new profile has no subscription."""
        user_id = uuid.uuid4()

        profile = UserProfile.create(user_id)

        assert profile.id == user_id
        assert profile.subscription_type == SubscriptionType.NONE
        assert profile.trial_activated_at is None
        assert profile.trial_ends_at is None

    def test_profile_requires_id(self):
        """Test a profile without id is rejected."""
        now = datetime.now(timezone.utc)
        with pytest.raises(ValueError, match="User ID is required"):
            UserProfile(
                id=None,
                subscription_type=SubscriptionType.NONE,
                trial_activated_at=None,
                trial_ends_at=None,
                created_at=now,
                updated_at=now,
            )

    def test_start_trial(self, fixed_time):
        """Test starting a trial sets both trial dates."""
        profile = UserProfile.create(uuid.uuid4())

        trial = profile.start_trial(7, now=fixed_time)

        assert trial.subscription_type == SubscriptionType.TRIAL
        assert trial.trial_activated_at == fixed_time
        assert trial.trial_ends_at == fixed_time + timedelta(days=7)
        assert profile.subscription_type == SubscriptionType.NONE

    def test_upgrade_to_lifetime_keeps_trial_history(self, fixed_time):
        """Test upgrading keeps the recorded trial dates."""
        trial = UserProfile.create(uuid.uuid4()).start_trial(7, now=fixed_time)

        lifetime = trial.upgrade_to_lifetime()

        assert lifetime.subscription_type == SubscriptionType.LIFETIME
        assert lifetime.trial_activated_at == fixed_time
