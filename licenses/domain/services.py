"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from typing import Iterable, Optional

from core.domain.exceptions import LicenseAlreadyExistsError
from core.domain.value_objects import KeyType
from licenses.domain.license_record import LicenseRecord


class LicenseEligibilityPolicy:
    """
    Domain service deciding whether a user may receive a new license.

    A user holds at most one active trial and at most one lifetime license.
    """

    @staticmethod
    def find_active(
        records: Iterable[LicenseRecord],
        key_type: Optional[KeyType] = None,
        current_time: Optional[datetime] = None,
    ) -> Optional[LicenseRecord]:
        """
        Return the newest active record, optionally of one type.

        Args:
            records: License records belonging to one user
            key_type: Restrict to this key type
            current_time: Reference time (defaults to now)

        Returns:
            Newest active LicenseRecord or None
        """
        active = [
            record
            for record in records
            if (key_type is None or record.key_type == key_type)
            and record.is_active(current_time)
        ]
        if not active:
            return None
        return max(active, key=lambda record: record.created_at)

    @staticmethod
    def ensure_can_claim_trial(
        records: Iterable[LicenseRecord], current_time: Optional[datetime] = None
    ) -> None:
        """
        Reject a trial claim when the user already holds a blocking license.

        Raises:
            LicenseAlreadyExistsError: With the existing record attached
        """
        records = list(records)
        trial = LicenseEligibilityPolicy.find_active(records, KeyType.TRIAL, current_time)
        if trial:
            raise LicenseAlreadyExistsError(
                "You already have an active trial license.", existing=trial.summary()
            )

        lifetime = LicenseEligibilityPolicy.find_active(records, KeyType.LIFETIME, current_time)
        if lifetime:
            raise LicenseAlreadyExistsError(
                "You already have a lifetime license.", existing=lifetime.summary()
            )

    @staticmethod
    def ensure_can_issue_lifetime(records: Iterable[LicenseRecord]) -> None:
        """
        Reject a second lifetime license.

        Raises:
            LicenseAlreadyExistsError: With the existing record attached
        """
        lifetime = LicenseEligibilityPolicy.find_active(records, KeyType.LIFETIME)
        if lifetime:
            raise LicenseAlreadyExistsError(
                "User already has a lifetime license", existing=lifetime.summary()
            )
