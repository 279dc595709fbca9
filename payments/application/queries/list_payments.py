"""
ListPaymentsQuery.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListPaymentsQuery:
    """Query to list payments; users only see their own."""

    actor: Actor
    status: Optional[str] = None
    request_id: Optional[uuid.UUID] = None
    page: int = 1
    limit: int = 10
