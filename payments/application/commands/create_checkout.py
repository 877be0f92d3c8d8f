"""
CreateCheckoutCommand.

Command to open a hosted checkout for a license purchase.
"""

import uuid
from dataclasses import dataclass


@dataclass
class CreateCheckoutCommand:
    """Command to create a checkout for a signed-in user."""

    user_id: uuid.UUID
    license_type: str = "lifetime"
