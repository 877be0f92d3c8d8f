"""
IssuePaidLicenseCommand.

Command to issue a lifetime license after a completed payment.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class IssuePaidLicenseCommand:
    """
    Command to issue a lifetime license.

    checkout_id is only carried for logging.
    """

    user_id: uuid.UUID
    checkout_id: Optional[str] = None
