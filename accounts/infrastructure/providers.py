"""
Identity provider wiring.

Builds the configured IdentityProvider lazily from settings so that
missing configuration surfaces as a service error at request time.
"""

from typing import Optional

from django.conf import settings

from accounts.ports.identity_provider import IdentityProvider
from core.domain.exceptions import ServiceConfigurationError

_identity_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    """
    Return the process-wide identity provider.

    Raises:
        ServiceConfigurationError: If Supabase settings are missing
    """
    global _identity_provider
    if _identity_provider is None:
        from accounts.infrastructure.supabase_identity_provider import SupabaseIdentityProvider

        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ServiceConfigurationError("Missing Supabase environment variables")
        _identity_provider = SupabaseIdentityProvider(
            base_url=settings.SUPABASE_URL,
            anon_key=settings.SUPABASE_ANON_KEY or settings.SUPABASE_SERVICE_ROLE_KEY,
            service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            timeout_seconds=settings.EXTERNAL_HTTP_TIMEOUT_SECONDS,
        )
    return _identity_provider


def set_identity_provider(provider: Optional[IdentityProvider]) -> None:
    """Replace the process-wide identity provider (None resets to settings)."""
    global _identity_provider
    _identity_provider = provider
