"""
Django implementation of UserProfileRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from accounts.domain.user_profile import UserProfile
from accounts.infrastructure.models import UserProfile as UserProfileModel
from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.value_objects import SubscriptionType


class DjangoUserProfileRepository(UserProfileRepository):
    """Django ORM implementation of UserProfileRepository."""

    def _to_domain(self, model: UserProfileModel) -> UserProfile:
        """
        Convert Django model to domain entity.

        Args:
            model: Django UserProfile model

        Returns:
            UserProfile domain entity
        """
        return UserProfile(
            id=model.id,
            subscription_type=SubscriptionType(model.subscription_type),
            trial_activated_at=model.trial_activated_at,
            trial_ends_at=model.trial_ends_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, profile: UserProfile) -> UserProfile:
        """
        Save a user profile entity.

        Args:
            profile: UserProfile entity to save

        Returns:
            Saved user profile entity
        """
        # pylint: disable=no-member
        model, _ = UserProfileModel.objects.update_or_create(
            id=profile.id,
            defaults={
                "subscription_type": profile.subscription_type.value,
                "trial_activated_at": profile.trial_activated_at,
                "trial_ends_at": profile.trial_ends_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        """
        Find a user profile by user ID.

        Args:
            user_id: User UUID

        Returns:
            UserProfile entity or None if not found
        """
        try:
            # pylint: disable=no-member
            return self._to_domain(UserProfileModel.objects.get(id=user_id))
        except UserProfileModel.DoesNotExist:
            return None

    @sync_to_async
    def ensure_exists(self, user_id: uuid.UUID) -> UserProfile:
        """
        Return the user's profile, creating an empty one if missing.

        Args:
            user_id: User UUID

        Returns:
            Existing or newly created UserProfile
        """
        # pylint: disable=no-member
        model, _ = UserProfileModel.objects.get_or_create(
            id=user_id, defaults={"subscription_type": SubscriptionType.NONE.value}
        )
        return self._to_domain(model)
