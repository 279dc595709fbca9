"""
DeleteLicenseCommand.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license."""

    actor: Actor
    license_id: uuid.UUID
