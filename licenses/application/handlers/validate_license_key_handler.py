"""
ValidateLicenseKeyHandler.

Handles the validate license key query. Validation is offline: only the
codec and its secret are involved, never the database.
"""

import logging

from core.metrics import license_key_validations_total
from licenses.application.dto.license_dto import LicenseValidationDTO
from licenses.application.queries.validate_license_key import ValidateLicenseKeyQuery
from licenses.domain.license_codec import LicenseKeyCodec

logger = logging.getLogger(__name__)


class ValidateLicenseKeyHandler:
    """Handler for ValidateLicenseKeyQuery."""

    def __init__(self, codec: LicenseKeyCodec):
        self.codec = codec

    async def handle(self, query: ValidateLicenseKeyQuery) -> LicenseValidationDTO:
        """
        Handle validate license key query.

        Args:
            query: ValidateLicenseKeyQuery

        Returns:
            LicenseValidationDTO with license info or a failure reason
        """
        result = self.codec.validate(query.license_key)
        license_key_validations_total.labels(result="valid" if result.is_valid else "invalid").inc()

        if not result.is_valid:
            logger.info("License key rejected: %s", result.reason)
            return LicenseValidationDTO(is_valid=False, reason=result.reason)

        return LicenseValidationDTO(is_valid=True, license=result.info.to_dict())
