"""
RegisterAccountCommand.

Command to create an identity-provider account and its profile.
"""

from dataclasses import dataclass


@dataclass
class RegisterAccountCommand:
    """Command to register a new account."""

    email: str
    password: str
