"""
DeleteLicenseRequestCommand.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class DeleteLicenseRequestCommand:
    """Command for an admin to delete a request."""

    actor: Actor
    request_id: uuid.UUID
    revoke_license: bool = False
