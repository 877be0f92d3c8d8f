"""
UserProfile repository port (interface).

This defines the contract for user profile persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from accounts.domain.user_profile import UserProfile


class UserProfileRepository(ABC):
    """
    Abstract repository for UserProfile entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, profile: UserProfile) -> UserProfile:
        """
        Save a user profile entity.

        Args:
            profile: UserProfile entity to save

        Returns:
            Saved user profile entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        """
        Find a user profile by user ID.

        Args:
            user_id: User UUID

        Returns:
            UserProfile entity or None if not found
        """
        pass

    @abstractmethod
    async def ensure_exists(self, user_id: uuid.UUID) -> UserProfile:
        """
        Return the user's profile, creating an empty one if missing.

        Args:
            user_id: User UUID

        Returns:
            Existing or newly created UserProfile
        """
        pass
