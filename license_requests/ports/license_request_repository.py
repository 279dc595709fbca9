"""
License request repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import uuid

from core.domain.value_objects import RequestStatus
from license_requests.domain.license_request import LicenseRequest


class LicenseRequestRepository(ABC):
    """
    Abstract repository for LicenseRequest entities.

    State changes that must be atomic with payments and licenses go
    through LifecycleUnitOfWork instead.
    """

    @abstractmethod
    async def add(self, request: LicenseRequest) -> LicenseRequest:
        """
        Insert a new request.

        Raises:
            OpenLicenseRequestExistsError: If the user already has an open request
        """
        pass

    @abstractmethod
    async def find_by_id(self, request_id: uuid.UUID) -> Optional[LicenseRequest]:
        """
        Find request by ID.

        Args:
            request_id: Request UUID

        Returns:
            LicenseRequest entity or None if not found
        """
        pass

    @abstractmethod
    async def find_open_by_user(self, user_id: int) -> Optional[LicenseRequest]:
        """
        Find the user's request that is still awaiting a decision.

        Args:
            user_id: Requester

        Returns:
            LicenseRequest entity or None
        """
        pass

    @abstractmethod
    async def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[LicenseRequest], int]:
        """
        List requests newest first.

        Args:
            user_id: Restrict to one requester
            status: Restrict to one status
            search: Case-insensitive match on names, reason or account IDs
            offset: Rows to skip
            limit: Page size

        Returns:
            (page of requests, total matching)
        """
        pass
