"""
LicenseRecord repository port (interface).

This defines the contract for license record persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from core.domain.value_objects import KeyType
from licenses.domain.license_record import LicenseRecord


class LicenseRecordRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, record: LicenseRecord) -> LicenseRecord:
        """
        Save a license record entity.

        Args:
            record: LicenseRecord entity to save

        Returns:
            Saved license record entity
        """
        pass

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by key string.

        Args:
            license_key: License key string

        Returns:
            LicenseRecord entity or None if not found
        """
        pass

    @abstractmethod
    async def find_for_user(
        self, user_id: uuid.UUID, key_type: Optional[KeyType] = None
    ) -> List[LicenseRecord]:
        """
        Find all license records of a user, newest first.

        Args:
            user_id: User UUID
            key_type: Restrict to this key type

        Returns:
            List of LicenseRecord entities
        """
        pass

    @abstractmethod
    async def find_latest_for_user(
        self, user_id: uuid.UUID, key_type: Optional[KeyType] = None
    ) -> Optional[LicenseRecord]:
        """
        Find the most recently created license record of a user.

        Args:
            user_id: User UUID
            key_type: Restrict to this key type

        Returns:
            LicenseRecord entity or None if the user has none
        """
        pass
