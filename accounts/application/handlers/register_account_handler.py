"""
RegisterAccountHandler.

Handles the register account command.
"""

import logging
import uuid
from dataclasses import dataclass

from accounts.application.commands.register_account import RegisterAccountCommand
from accounts.ports.identity_provider import IdentityProvider
from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.value_objects import Email

logger = logging.getLogger(__name__)


@dataclass
class RegisteredAccountDTO:
    """DTO for a freshly registered account."""

    user_id: uuid.UUID
    email: str
    message: str


class RegisterAccountHandler:
    """Handler for RegisterAccountCommand."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        user_profile_repository: UserProfileRepository,
    ):
        """Initialize handler with collaborators."""
        self.identity_provider = identity_provider
        self.user_profile_repository = user_profile_repository

    async def handle(self, command: RegisterAccountCommand) -> RegisteredAccountDTO:
        """
        Handle register account command.

        Args:
            command: RegisterAccountCommand

        Returns:
            RegisteredAccountDTO

        Raises:
            AccountRegistrationError: If the identity provider rejects the sign-up
            UpstreamServiceError: If the identity provider is unreachable
        """
        email = Email(command.email.strip().lower())
        user_id = await self.identity_provider.create_account(str(email), command.password)

        # An existing profile is fine; sign-up can be retried after email confirmation
        await self.user_profile_repository.ensure_exists(user_id)
        logger.info("Account registered", extra={"user_id": str(user_id)})

        return RegisteredAccountDTO(
            user_id=user_id,
            email=str(email),
            message="Account created. Check your email to confirm your address.",
        )
