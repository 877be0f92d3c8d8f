"""
Identity values returned by the identity provider.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthenticatedAccount:
    """An account known to the identity provider."""

    user_id: uuid.UUID
    email: str
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name used as the license customer name."""
        return self.full_name or self.email
