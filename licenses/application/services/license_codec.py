"""
License codec wiring.

The codec is stateless apart from its secret, so one instance is shared
per process and rebuilt only when the configured secret changes.
"""

from typing import Optional, Tuple

from django.conf import settings

from core.domain.exceptions import ServiceConfigurationError
from licenses.domain.license_codec import LicenseKeyCodec

_codec: Optional[Tuple[str, LicenseKeyCodec]] = None


def get_license_codec() -> LicenseKeyCodec:
    """
    Return the codec configured with ``settings.LICENSE_KEY_SECRET``.

    Raises:
        ServiceConfigurationError: If no secret is configured
    """
    global _codec
    secret = getattr(settings, "LICENSE_KEY_SECRET", "")
    if not secret:
        raise ServiceConfigurationError("LICENSE_KEY_SECRET is not configured")
    if _codec is None or _codec[0] != secret:
        _codec = (secret, LicenseKeyCodec(secret))
    return _codec[1]
