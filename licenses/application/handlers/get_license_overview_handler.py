"""
GetLicenseOverviewHandler.

Handles the get license overview query.
"""

from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.value_objects import SubscriptionType
from licenses.application.dto.license_dto import LicenseOverviewDTO, LicenseRecordDTO
from licenses.application.queries.get_license_overview import GetLicenseOverviewQuery
from licenses.ports.license_record_repository import LicenseRecordRepository


class GetLicenseOverviewHandler:
    """Handler for GetLicenseOverviewQuery."""

    def __init__(
        self,
        user_profile_repository: UserProfileRepository,
        license_record_repository: LicenseRecordRepository,
    ):
        """Initialize handler with repositories."""
        self.user_profile_repository = user_profile_repository
        self.license_record_repository = license_record_repository

    async def handle(self, query: GetLicenseOverviewQuery) -> LicenseOverviewDTO:
        """
        Handle get license overview query.

        A user without a profile row is reported as having no subscription.

        Args:
            query: GetLicenseOverviewQuery

        Returns:
            LicenseOverviewDTO
        """
        profile = await self.user_profile_repository.find_by_id(query.user_id)
        subscription = profile.subscription_type if profile else SubscriptionType.NONE

        latest = await self.license_record_repository.find_latest_for_user(query.user_id)
        license_dto = None
        if latest:
            license_dto = LicenseRecordDTO(
                license_key=latest.license_key,
                key_type=latest.key_type.value,
                created_at=latest.created_at,
                expires_at=latest.expires_at,
                is_activated=latest.is_activated,
                is_expired=latest.is_expired(),
                days_remaining=latest.days_remaining(),
            )

        return LicenseOverviewDTO(
            user_id=query.user_id,
            subscription_type=subscription.value,
            license=license_dto,
        )
