"""
ClaimTrialHandler.

Handles the claim trial command.
"""

import logging

from accounts.ports.identity_provider import IdentityProvider
from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.exceptions import UserNotFoundError
from core.domain.value_objects import KeyType
from licenses.application.commands.claim_trial import ClaimTrialCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO
from licenses.application.services.license_issuance import LicenseIssuanceService
from licenses.domain.license_codec import TRIAL_DAYS, LicenseKeyCodec
from licenses.domain.services import LicenseEligibilityPolicy
from licenses.ports.license_record_repository import LicenseRecordRepository

logger = logging.getLogger(__name__)


class ClaimTrialHandler:
    """Handler for ClaimTrialCommand."""

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

    async def handle(self, command: ClaimTrialCommand) -> IssuedLicenseDTO:
        """
        Handle claim trial command.

        Args:
            command: ClaimTrialCommand

        Returns:
            IssuedLicenseDTO for the new trial key

        Raises:
            UserNotFoundError: If the identity provider does not know the user
            LicenseAlreadyExistsError: If an active trial or a lifetime license exists
        """
        account = await self.identity_provider.get_user(command.user_id)
        if not account:
            raise UserNotFoundError(f"User {command.user_id} not found")

        profile = await self.user_profile_repository.ensure_exists(account.user_id)

        records = await self.license_record_repository.find_for_user(account.user_id)
        LicenseEligibilityPolicy.ensure_can_claim_trial(records)

        record = await self.issuance.issue(account, KeyType.TRIAL, TRIAL_DAYS)

        try:
            await self.user_profile_repository.save(
                profile.start_trial(TRIAL_DAYS, now=record.created_at)
            )
        except Exception:  # pylint: disable=broad-exception-caught
            # The key is already stored; the profile flag can be repaired later
            logger.exception(
                "Failed to mark trial on user profile", extra={"user_id": str(account.user_id)}
            )

        return IssuedLicenseDTO(
            success=True,
            message=f"Success! Check your email ({account.email}) for your trial license key.",
            license_key=record.license_key,
            key_type=record.key_type.value,
            expires_at=record.expires_at,
        )
