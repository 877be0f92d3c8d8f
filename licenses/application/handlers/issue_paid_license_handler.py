"""
IssuePaidLicenseHandler.

Handles the issue paid license command raised by completed checkouts.
"""

import logging

from accounts.ports.identity_provider import IdentityProvider
from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.exceptions import UserNotFoundError
from core.domain.value_objects import KeyType
from licenses.application.commands.issue_paid_license import IssuePaidLicenseCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO
from licenses.application.services.license_issuance import LicenseIssuanceService
from licenses.domain.license_codec import LicenseKeyCodec
from licenses.domain.services import LicenseEligibilityPolicy
from licenses.ports.license_record_repository import LicenseRecordRepository

logger = logging.getLogger(__name__)


class IssuePaidLicenseHandler:
    """Handler for IssuePaidLicenseCommand."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        user_profile_repository: UserProfileRepository,
        license_record_repository: LicenseRecordRepository,
        codec: LicenseKeyCodec,
    ):
        """Initialize handler with collaborators."""
        self.identity_provider = identity_provider
        self.user_profile_repository = user_profile_repository
        self.license_record_repository = license_record_repository
        self.issuance = LicenseIssuanceService(codec, license_record_repository)

    async def handle(self, command: IssuePaidLicenseCommand) -> IssuedLicenseDTO:
        """
        Handle issue paid license command.

        Args:
            command: IssuePaidLicenseCommand

        Returns:
            IssuedLicenseDTO for the new lifetime key

        Raises:
            UserNotFoundError: If the identity provider does not know the user
            LicenseAlreadyExistsError: If the user already holds a lifetime license
        """
        account = await self.identity_provider.get_user(command.user_id)
        if not account:
            raise UserNotFoundError(f"User {command.user_id} not found")

        profile = await self.user_profile_repository.ensure_exists(account.user_id)

        records = await self.license_record_repository.find_for_user(
            account.user_id, KeyType.LIFETIME
        )
        LicenseEligibilityPolicy.ensure_can_issue_lifetime(records)

        record = await self.issuance.issue(account, KeyType.LIFETIME)

        try:
            await self.user_profile_repository.save(profile.upgrade_to_lifetime())
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception(
                "Failed to mark lifetime subscription on user profile",
                extra={"user_id": str(account.user_id), "checkout_id": command.checkout_id},
            )

        logger.info(
            "Paid license issued",
            extra={"user_id": str(account.user_id), "checkout_id": command.checkout_id},
        )
        return IssuedLicenseDTO(
            success=True,
            message=f"Payment received. Your lifetime license was sent to {account.email}.",
            license_key=record.license_key,
            key_type=record.key_type.value,
            expires_at=record.expires_at,
        )
