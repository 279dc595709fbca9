"""
GetLicenseRequestQuery.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class GetLicenseRequestQuery:
    """Query to fetch one request (owner or admin)."""

    actor: Actor
    request_id: uuid.UUID
