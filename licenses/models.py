"""
License key model registration.
"""

from licenses.infrastructure.models import LicenseKey  # noqa: F401
