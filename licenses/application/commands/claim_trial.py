"""
ClaimTrialCommand.

Command to give a signed-in user a seven day trial license.
"""

import uuid
from dataclasses import dataclass


@dataclass
class ClaimTrialCommand:
    """Command to claim a trial license for a user."""

    user_id: uuid.UUID
