"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
import uuid

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, license: License) -> License:
        """
        Insert a new license.

        The key is regenerated if it collides with an existing one, so the
        returned entity may carry a different key than the one passed in.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity
        """
        pass

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Persist changes to an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            LicenseNotFoundError: If the license no longer exists
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_account_id(self, account_id: str) -> List[License]:
        """
        Find all licenses covering an account ID.

        Args:
            account_id: Numeric account ID

        Returns:
            List of License entities, newest first
        """
        pass

    @abstractmethod
    async def find_expired_active(self, current_time: datetime) -> List[License]:
        """
        Find licenses still marked active whose expiry date has passed.

        Args:
            current_time: Reference time
        """
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license.

        Returns:
            True if a license was deleted
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[LicenseStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[License], int]:
        """
        List licenses, newest first.

        Args:
            status: Optional status filter
            search: Matches key, names or account ID
            offset: Rows to skip
            limit: Page size

        Returns:
            Tuple of (page of licenses, total matching)
        """
        pass
