"""
ListLicenseRequestsQuery.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListLicenseRequestsQuery:
    """
    Query to list requests.

    Users see their own requests; admins see every request and may filter
    by status and search.
    """

    actor: Actor
    status: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10
