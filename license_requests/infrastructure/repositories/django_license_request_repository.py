"""
Django implementation of LicenseRequestRepository port.
"""
import logging
import uuid
from typing import Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q

from core.domain.exceptions import (
    ConcurrentUpdateError,
    LicenseRequestNotFoundError,
    OpenLicenseRequestExistsError,
)
from core.domain.value_objects import OPEN_REQUEST_STATUSES, RequestStatus
from license_requests.domain.license_request import LicenseRequest
from license_requests.infrastructure.models import LicenseRequest as LicenseRequestModel
from license_requests.ports.license_request_repository import LicenseRequestRepository

logger = logging.getLogger(__name__)


class DjangoLicenseRequestRepository(LicenseRequestRepository):
    """
    Django ORM implementation of LicenseRequestRepository.

    The unique open-request constraint is enforced by the database, so two
    concurrent submissions by one user cannot both succeed.
    """

    def _to_domain(self, model: LicenseRequestModel) -> LicenseRequest:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseRequest model

        Returns:
            LicenseRequest domain entity
        """
        return LicenseRequest(
            id=model.id,
            user_id=model.user_id,
            first_name=model.first_name,
            last_name=model.last_name,
            account_ids=tuple(model.account_ids or ()),
            reason=model.reason,
            status=RequestStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            subscription_plan_id=model.subscription_plan_id,
            payment_id=model.payment_id,
            admin_notes=model.admin_notes,
            approved_by=model.approved_by_id,
            approved_at=model.approved_at,
            rejected_by=model.rejected_by_id,
            rejected_at=model.rejected_at,
        )

    def _fields(self, request: LicenseRequest) -> dict:
        return {
            "first_name": request.first_name,
            "last_name": request.last_name,
            "account_ids": list(request.account_ids),
            "reason": request.reason,
            "status": request.status.value,
            "subscription_plan_id": request.subscription_plan_id,
            "payment_id": request.payment_id,
            "admin_notes": request.admin_notes,
            "approved_by_id": request.approved_by,
            "approved_at": request.approved_at,
            "rejected_by_id": request.rejected_by,
            "rejected_at": request.rejected_at,
            "updated_at": request.updated_at,
        }

    def _insert(self, request: LicenseRequest) -> LicenseRequest:
        try:
            with transaction.atomic():
                model = LicenseRequestModel.objects.create(
                    id=request.id,
                    user_id=request.user_id,
                    created_at=request.created_at,
                    **self._fields(request),
                )
        except IntegrityError as exc:
            logger.info("Open license request already exists", extra={"user_id": request.user_id})
            raise OpenLicenseRequestExistsError() from exc
        return self._to_domain(model)

    def _update(
        self, request: LicenseRequest, expected_statuses: Iterable[RequestStatus]
    ) -> LicenseRequest:
        """
        Write a request only if its stored status is still one of expected_statuses.

        Raises:
            ConcurrentUpdateError: If the stored status changed
            LicenseRequestNotFoundError: If the request no longer exists
            OpenLicenseRequestExistsError: If reopening collides with another open request
        """
        statuses = [status.value for status in expected_statuses]
        try:
            with transaction.atomic():
                updated = LicenseRequestModel.objects.filter(
                    id=request.id, status__in=statuses
                ).update(**self._fields(request))
        except IntegrityError as exc:
            raise OpenLicenseRequestExistsError() from exc
        if not updated:
            if LicenseRequestModel.objects.filter(id=request.id).exists():
                raise ConcurrentUpdateError("License request has already been processed")
            raise LicenseRequestNotFoundError()
        return self._to_domain(LicenseRequestModel.objects.get(id=request.id))

    def _delete(self, request_id: uuid.UUID) -> bool:
        deleted, _ = LicenseRequestModel.objects.filter(id=request_id).delete()
        return deleted > 0

    @sync_to_async
    def add(self, request: LicenseRequest) -> LicenseRequest:
        """
        Insert a new request.

        Args:
            request: LicenseRequest entity to insert

        Returns:
            Stored request entity
        """
        return self._insert(request)

    @sync_to_async
    def find_by_id(self, request_id: uuid.UUID) -> Optional[LicenseRequest]:
        try:
            return self._to_domain(LicenseRequestModel.objects.get(id=request_id))
        except LicenseRequestModel.DoesNotExist:
            return None

    @sync_to_async
    def find_open_by_user(self, user_id: int) -> Optional[LicenseRequest]:
        model = (
            LicenseRequestModel.objects.filter(
                user_id=user_id,
                status__in=[status.value for status in OPEN_REQUEST_STATUSES],
            )
            .order_by("-created_at")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[LicenseRequest], int]:
        """
        List requests, newest first.

        Returns:
            Tuple of (page of requests, total matching)
        """
        queryset = LicenseRequestModel.objects.all()
        if user_id is not None:
            queryset = queryset.filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status.value)
        if search:
            queryset = queryset.filter(
                Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(reason__icontains=search)
                | Q(user__email__icontains=search)
                | Q(account_ids__icontains=search)
            )
        total = queryset.count()
        page = queryset.order_by("-created_at")[offset : offset + limit]
        return [self._to_domain(model) for model in page], total
