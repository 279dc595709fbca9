"""
Django implementation of LifecycleUnitOfWork port.
"""
# pylint: disable=protected-access
import logging
from typing import List

from core.infrastructure.database import async_atomic
from license_requests.domain.license_request import LicenseRequest
from license_requests.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from license_requests.ports.unit_of_work import (
    LifecycleChange,
    LifecycleResult,
    LifecycleUnitOfWork,
)
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from payments.infrastructure.repositories.django_payment_repository import (
    DjangoPaymentRepository,
)

logger = logging.getLogger(__name__)


class DjangoLifecycleUnitOfWork(LifecycleUnitOfWork):
    """
    Commits lifecycle changes in one database transaction.

    Status guards are compare-and-swap updates, so of two admins deciding the
    same request at once exactly one commit succeeds.
    """

    def __init__(
        self,
        request_repository: DjangoLicenseRequestRepository,
        payment_repository: DjangoPaymentRepository,
        license_repository: DjangoLicenseRepository,
    ):
        self.request_repository = request_repository
        self.payment_repository = payment_repository
        self.license_repository = license_repository

    @async_atomic
    def commit(self, change: LifecycleChange) -> LifecycleResult:
        """
        Write every record in the change atomically.

        Args:
            change: Records to write

        Returns:
            Stored records
        """
        payment = None
        if change.new_payment is not None:
            payment = self.payment_repository._insert(change.new_payment)
        if change.payment is not None:
            payment = self.payment_repository._update(
                change.payment, change.expected_payment_statuses
            )

        request = None
        if change.request is not None:
            request = self.request_repository._update(
                change.request, change.expected_request_statuses
            )

        license = None
        if change.new_license is not None:
            license = self.license_repository._insert(change.new_license)

        logger.debug(
            "Lifecycle change committed",
            extra={
                "request_id": str(request.id) if request else None,
                "payment_id": str(payment.id) if payment else None,
                "license_id": str(license.id) if license else None,
            },
        )
        return LifecycleResult(request=request, payment=payment, license=license)

    @async_atomic
    def delete_request(self, request: LicenseRequest, revoke_licenses: bool) -> List[License]:
        """
        Delete a request, and optionally the licenses issued from it.

        Licenses that are kept lose their link to the request.
        """
        revoked = []
        if revoke_licenses:
            revoked = self.license_repository._delete_for_request(request.id)
        self.request_repository._delete(request.id)
        return revoked
