"""
Identity provider port (interface).

This defines the contract for the external identity service that owns
sign-up, sign-in and token issuance. Implementations are in the
infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from accounts.domain.account import AuthenticatedAccount


class IdentityProvider(ABC):
    """
    Abstract identity provider.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def create_account(self, email: str, password: str) -> uuid.UUID:
        """
        Create an account.

        Args:
            email: Account email
            password: Account password

        Returns:
            New user UUID

        Raises:
            AccountRegistrationError: If the provider rejects the sign-up
            UpstreamServiceError: If the provider is unreachable
        """
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Optional[AuthenticatedAccount]:
        """
        Resolve an access token to its account.

        Args:
            token: Bearer access token

        Returns:
            AuthenticatedAccount or None if the token is invalid or expired
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: uuid.UUID) -> Optional[AuthenticatedAccount]:
        """
        Look up an account by user id.

        Args:
            user_id: User UUID

        Returns:
            AuthenticatedAccount or None if not found
        """
        pass
