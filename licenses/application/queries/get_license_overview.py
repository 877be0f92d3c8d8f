"""
GetLicenseOverviewQuery.

Query for a user's subscription and most recent license.
"""

import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseOverviewQuery:
    """Query to get the license overview of a user."""

    user_id: uuid.UUID
