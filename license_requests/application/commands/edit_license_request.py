"""
EditLicenseRequestCommand.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional

from core.domain.value_objects import Actor


@dataclass
class EditLicenseRequestCommand:
    """Command for the owner to edit a pending request; None leaves a field unchanged."""

    actor: Actor
    request_id: uuid.UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    account_ids: Optional[List[str]] = None
    reason: Optional[str] = None
