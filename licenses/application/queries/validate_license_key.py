"""
ValidateLicenseKeyQuery.

Query to check a license key offline against the server secret.
"""

from dataclasses import dataclass


@dataclass
class ValidateLicenseKeyQuery:
    """Query to validate a license key string."""

    license_key: str
