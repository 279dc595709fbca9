"""
CreateLicenseRequestCommand.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from core.domain.value_objects import Actor


@dataclass
class CreateLicenseRequestCommand:
    """Command for a user to request a license."""

    actor: Actor
    first_name: str
    last_name: str
    reason: str
    account_ids: List[str] = field(default_factory=list)
    subscription_plan_id: Optional[uuid.UUID] = None
