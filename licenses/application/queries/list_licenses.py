"""
ListLicensesQuery.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListLicensesQuery:
    """Query to list licenses with filters (admin only)."""

    actor: Actor
    status: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10
