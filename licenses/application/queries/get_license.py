"""
GetLicenseQuery.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class GetLicenseQuery:
    """Query for a single license (admin only)."""

    actor: Actor
    license_id: uuid.UUID
