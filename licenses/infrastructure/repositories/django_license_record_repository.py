"""
Django implementation of LicenseRecordRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import KeyType
from licenses.domain.license_record import LicenseRecord
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.ports.license_record_repository import LicenseRecordRepository


class DjangoLicenseRecordRepository(LicenseRecordRepository):
    """
    Django ORM implementation of LicenseRecordRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseKeyModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseKey model

        Returns:
            LicenseRecord domain entity
        """
        return LicenseRecord(
            id=model.id,
            user_id=model.user_id,
            license_key=model.license_key,
            key_type=KeyType(model.key_type),
            expires_at=model.expires_at,
            is_activated=model.is_activated,
            created_at=model.created_at,
            device_id=model.device_id,
        )

    def _filter(self, user_id: uuid.UUID, key_type: Optional[KeyType]):
        # pylint: disable=no-member
        queryset = LicenseKeyModel.objects.filter(user_id=user_id)
        if key_type:
            queryset = queryset.filter(key_type=key_type.value)
        return queryset.order_by("-created_at")

    @sync_to_async
    def save(self, record: LicenseRecord) -> LicenseRecord:
        """
        Save a license record entity.

        Args:
            record: LicenseRecord entity to save

        Returns:
            Saved license record entity
        """
        # pylint: disable=no-member
        model, _ = LicenseKeyModel.objects.update_or_create(
            id=record.id,
            defaults={
                "user_id": record.user_id,
                "license_key": record.license_key,
                "key_type": record.key_type.value,
                "device_id": record.device_id,
                "expires_at": record.expires_at,
                "is_activated": record.is_activated,
                "created_at": record.created_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by key string.

        Args:
            license_key: License key string

        Returns:
            LicenseRecord entity or None if not found
        """
        try:
            # pylint: disable=no-member
            return self._to_domain(LicenseKeyModel.objects.get(license_key=license_key))
        except LicenseKeyModel.DoesNotExist:
            return None

    @sync_to_async
    def find_for_user(
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
        return [self._to_domain(model) for model in self._filter(user_id, key_type)]

    @sync_to_async
    def find_latest_for_user(
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
        model = self._filter(user_id, key_type).first()
        return self._to_domain(model) if model else None
