"""
Supabase implementation of the IdentityProvider port.

Talks to the Supabase Auth (GoTrue) REST API with ``requests``.
"""

import logging
import uuid
from typing import Any, Dict, Optional

import requests
from asgiref.sync import sync_to_async

from accounts.domain.account import AuthenticatedAccount
from accounts.ports.identity_provider import IdentityProvider
from core.domain.exceptions import AccountRegistrationError, UpstreamServiceError

logger = logging.getLogger(__name__)


class SupabaseIdentityProvider(IdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Sign-up and token verification use the anon key; user lookups use the
    service-role key against the admin API.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: str,
        timeout_seconds: float = 10,
    ):
        """
        Initialize provider.

        Args:
            base_url: Supabase project URL
            anon_key: Public anon API key
            service_role_key: Service-role key for admin endpoints
            timeout_seconds: HTTP timeout per request
        """
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_role_key = service_role_key
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def _to_account(user: Dict[str, Any]) -> AuthenticatedAccount:
        metadata = user.get("user_metadata") or {}
        return AuthenticatedAccount(
            user_id=uuid.UUID(user["id"]),
            email=user.get("email") or "",
            full_name=metadata.get("full_name"),
        )

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        return (
            body.get("msg")
            or body.get("error_description")
            or body.get("message")
            or body.get("error")
            or f"HTTP {response.status_code}"
        )

    @sync_to_async
    def create_account(self, email: str, password: str) -> uuid.UUID:
        """
        Create an account through the public sign-up endpoint.

        Args:
            email: Account email
            password: Account password

        Returns:
            New user UUID
        """
        try:
            response = requests.post(
                f"{self.base_url}/auth/v1/signup",
                json={"email": email, "password": password},
                headers={"apikey": self.anon_key, "Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Identity provider unreachable during sign-up: %s", e)
            raise UpstreamServiceError("Identity provider unavailable") from e

        if response.status_code >= 500:
            logger.error("Identity provider sign-up failed: %s", response.status_code)
            raise UpstreamServiceError("Identity provider unavailable")
        if not response.ok:
            message = self._error_message(response)
            logger.warning("Sign-up rejected for %s: %s", email, message)
            raise AccountRegistrationError(message)

        body = response.json()
        user = body.get("user") or body
        return uuid.UUID(user["id"])

    @sync_to_async
    def verify_token(self, token: str) -> Optional[AuthenticatedAccount]:
        """
        Resolve an access token to its account.

        Args:
            token: Bearer access token

        Returns:
            AuthenticatedAccount or None if the token is rejected
        """
        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user",
                headers={"apikey": self.anon_key, "Authorization": f"Bearer {token}"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Identity provider unreachable during token check: %s", e)
            raise UpstreamServiceError("Identity provider unavailable") from e

        if response.status_code in (401, 403, 404):
            return None
        if not response.ok:
            raise UpstreamServiceError(f"Token verification failed: HTTP {response.status_code}")
        return self._to_account(response.json())

    @sync_to_async
    def get_user(self, user_id: uuid.UUID) -> Optional[AuthenticatedAccount]:
        """
        Look up an account through the admin API.

        Args:
            user_id: User UUID

        Returns:
            AuthenticatedAccount or None if not found
        """
        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/admin/users/{user_id}",
                headers={
                    "apikey": self.service_role_key,
                    "Authorization": f"Bearer {self.service_role_key}",
                },
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Identity provider unreachable during user lookup: %s", e)
            raise UpstreamServiceError("Identity provider unavailable") from e

        if response.status_code == 404:
            return None
        if not response.ok:
            raise UpstreamServiceError(f"User lookup failed: HTTP {response.status_code}")
        return self._to_account(response.json())
