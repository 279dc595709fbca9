"""
UpdateLicenseCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.domain.value_objects import Actor


@dataclass
class UpdateLicenseCommand:
    """Command to change a license; None leaves a field unchanged."""

    actor: Actor
    license_id: uuid.UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    account_ids: Optional[List[str]] = None
    expires_at: Optional[datetime] = None
    status: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
