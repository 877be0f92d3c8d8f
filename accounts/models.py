"""
User profile model registration.
"""

from accounts.infrastructure.models import UserProfile  # noqa: F401
