"""
Bearer token authentication middleware.

This middleware resolves identity provider access tokens for the
endpoints that act on behalf of a signed-in user.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.providers import get_identity_provider
from core.domain.exceptions import DomainException

logger = logging.getLogger(__name__)

PROTECTED_PATH_PREFIXES = (
    "/api/v1/license/claim-trial",
    "/api/v1/license/me",
    "/api/v1/payments/checkout",
)


def _error(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class BearerTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for bearer token authentication.

    This middleware:
    1. Reads the Authorization header on protected paths
    2. Verifies the token with the identity provider
    3. Stores the account on ``request.account``
    4. Returns 401 Unauthorized if authentication fails
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.account = None  # type: ignore
        if not request.path.startswith(PROTECTED_PATH_PREFIXES):
            return None

        token = self._extract_token(request)
        if not token:
            return _error("AUTHENTICATION_REQUIRED", "Missing bearer token", 401)

        try:
            account = async_to_sync(get_identity_provider().verify_token)(token)
        except DomainException as e:
            logger.error("Error authenticating request: %s", e.message)
            return _error(e.code, e.message, 500)

        if not account:
            logger.warning("Invalid bearer token attempted: %s...", token[:8])
            return _error("AUTHENTICATION_ERROR", "Invalid or expired token", 401)

        request.account = account  # type: ignore
        return None

    @staticmethod
    def _extract_token(request: HttpRequest) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()
