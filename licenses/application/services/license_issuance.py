"""
License issuance service.

Shared by the trial and paid flows: generate a key, persist the record
and announce it on the event bus.
"""

import logging
from typing import Optional

from accounts.domain.account import AuthenticatedAccount
from core.domain.value_objects import KeyType
from core.infrastructure.events import event_bus
from licenses.domain.events import LicenseKeyIssued
from licenses.domain.license_codec import LicenseKeyCodec, LicenseType
from licenses.domain.license_record import LicenseRecord
from licenses.ports.license_record_repository import LicenseRecordRepository

logger = logging.getLogger(__name__)

_CODEC_TYPES = {
    KeyType.TRIAL: LicenseType.TRIAL,
    KeyType.LIFETIME: LicenseType.LIFETIME,
    KeyType.DEMO: LicenseType.DEMO,
}


class LicenseIssuanceService:
    """Generates, stores and publishes license keys for accounts."""

    def __init__(self, codec: LicenseKeyCodec, license_record_repository: LicenseRecordRepository):
        self.codec = codec
        self.license_record_repository = license_record_repository

    async def issue(
        self,
        account: AuthenticatedAccount,
        key_type: KeyType,
        days_valid: Optional[int] = None,
    ) -> LicenseRecord:
        """
        Issue a license key to an account.

        Args:
            account: Account receiving the key
            key_type: Stored key type
            days_valid: Validity in days (ignored for lifetime keys)

        Returns:
            Saved LicenseRecord
        """
        license_type = _CODEC_TYPES[key_type]
        if license_type is LicenseType.LIFETIME:
            generated = self.codec.generate_lifetime_key(account.display_name, account.email)
        else:
            generated = self.codec.generate(
                license_type=license_type,
                days=days_valid or 0,
                customer_name=account.display_name,
                customer_email=account.email,
            )

        record = LicenseRecord.create(
            user_id=account.user_id,
            license_key=generated.license_key,
            key_type=key_type,
            days_valid=days_valid,
        )
        saved = await self.license_record_repository.save(record)
        logger.info(
            "License key issued",
            extra={
                "user_id": str(account.user_id),
                "key_type": key_type.value,
                "license_record_id": str(saved.id),
            },
        )

        await event_bus.publish(
            LicenseKeyIssued(
                license_record_id=saved.id,
                user_id=account.user_id,
                key_type=key_type.value,
                license_key=saved.license_key,
                customer_email=account.email,
            )
        )
        return saved
