"""
DecideLicenseRequestCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class DecideLicenseRequestCommand:
    """Command for an admin to approve, reject or exempt a request."""

    actor: Actor
    request_id: uuid.UUID
    action: str
    expires_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
