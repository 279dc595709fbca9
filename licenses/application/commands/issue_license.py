"""
IssueLicenseCommand.

Command for an admin to issue a license directly, outside the request flow.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from core.domain.value_objects import Actor


@dataclass
class IssueLicenseCommand:
    """Command to issue a license."""

    actor: Actor
    first_name: str
    last_name: str
    account_ids: List[str]
    expires_at: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)
