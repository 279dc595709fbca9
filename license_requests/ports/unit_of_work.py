"""
Lifecycle unit of work port (interface).

Request approval, payment decisions and license issuance touch up to three
records. A LifecycleChange describes all of them; commit() writes them in a
single transaction or not at all.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.domain.value_objects import PaymentStatus, RequestStatus
from license_requests.domain.license_request import LicenseRequest
from licenses.domain.license import License
from payments.domain.payment import Payment


@dataclass(frozen=True)
class LifecycleChange:
    """
    Records to write together.

    expected_*_statuses hold the statuses the records were read with. A
    write only succeeds while the stored record is still in one of them.
    """

    request: Optional[LicenseRequest] = None
    expected_request_statuses: Tuple[RequestStatus, ...] = ()
    payment: Optional[Payment] = None
    expected_payment_statuses: Tuple[PaymentStatus, ...] = ()
    new_payment: Optional[Payment] = None
    new_license: Optional[License] = None


@dataclass(frozen=True)
class LifecycleResult:
    """Records as stored by a commit."""

    request: Optional[LicenseRequest] = None
    payment: Optional[Payment] = None
    license: Optional[License] = None


class LifecycleUnitOfWork(ABC):
    """Atomic writer for request, payment and license changes."""

    @abstractmethod
    async def commit(self, change: LifecycleChange) -> LifecycleResult:
        """
        Write every record in the change atomically.

        The new payment is inserted before the request is updated, and the new
        license is inserted last so that it can reference the request.

        Args:
            change: Records to write

        Returns:
            Stored records

        Raises:
            ConcurrentUpdateError: If a record left its expected status
            OpenLicenseRequestExistsError: If a reopened request collides with
                another open request of the same user
        """
        pass

    @abstractmethod
    async def delete_request(self, request: LicenseRequest, revoke_licenses: bool) -> List[License]:
        """
        Delete a request, and optionally the licenses issued from it.

        Args:
            request: Request to delete
            revoke_licenses: Delete licenses linked to the request

        Returns:
            Deleted licenses
        """
        pass
