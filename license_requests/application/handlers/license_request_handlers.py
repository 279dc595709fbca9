"""
License request handlers for owner edits, admin deletion and reads.
"""
import logging

from core.application.pagination import Page, PageRequest
from core.domain.exceptions import (
    AdminRequiredError,
    ApprovedRequestDeletionError,
    LicenseRequestNotFoundError,
    NotRequestOwnerError,
    ValidationError,
)
from core.domain.value_objects import RequestStatus
from core.infrastructure.events import event_bus
from license_requests.application.commands.delete_license_request import (
    DeleteLicenseRequestCommand,
)
from license_requests.application.commands.edit_license_request import (
    EditLicenseRequestCommand,
)
from license_requests.application.dto.license_request_dto import LicenseRequestDTO
from license_requests.application.queries.get_license_request import GetLicenseRequestQuery
from license_requests.application.queries.list_license_requests import (
    ListLicenseRequestsQuery,
)
from license_requests.domain.events import LicenseRequestDeleted, LicenseRequestEdited
from license_requests.ports.license_request_repository import LicenseRequestRepository
from license_requests.ports.unit_of_work import LifecycleChange, LifecycleUnitOfWork
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseDeleted

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("first_name", "last_name", "account_ids", "reason")


def parse_request_status(value):
    """Map a status string to RequestStatus; None passes through."""
    if value is None or value == "":
        return None
    try:
        return RequestStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid request status: {value}") from exc


class EditLicenseRequestHandler:
    """Handler for EditLicenseRequestCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        unit_of_work: LifecycleUnitOfWork,
    ):
        self.request_repository = request_repository
        self.unit_of_work = unit_of_work

    async def handle(self, command: EditLicenseRequestCommand) -> LicenseRequestDTO:
        """
        Apply owner changes to a pending request.

        Raises:
            LicenseRequestNotFoundError: If the request does not exist
            NotRequestOwnerError: If the caller is not the requester
            InvalidRequestTransitionError: If the request is not pending
            ValidationError: If a field is invalid
        """
        request = await self.request_repository.find_by_id(command.request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {command.request_id} not found")

        edited = request.edit(
            command.actor.user_id,
            first_name=command.first_name,
            last_name=command.last_name,
            account_ids=command.account_ids,
            reason=command.reason,
        )
        result = await self.unit_of_work.commit(
            LifecycleChange(request=edited, expected_request_statuses=(RequestStatus.PENDING,))
        )

        changed = [name for name in EDITABLE_FIELDS if getattr(command, name) is not None]
        logger.info(
            "License request edited",
            extra={"request_id": str(request.id), "fields": changed},
        )
        await event_bus.publish(
            LicenseRequestEdited(
                request_id=request.id,
                user_id=command.actor.user_id,
                changed_fields=changed,
            )
        )
        return LicenseRequestDTO.from_entity(result.request)


class DeleteLicenseRequestHandler:
    """Handler for DeleteLicenseRequestCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        unit_of_work: LifecycleUnitOfWork,
    ):
        self.request_repository = request_repository
        self.unit_of_work = unit_of_work

    async def handle(self, command: DeleteLicenseRequestCommand) -> None:
        """
        Delete a request.

        An approved request is only deleted together with the licenses it
        issued, and only when revoke_license is set.

        Raises:
            AdminRequiredError: If the caller is not an admin
            LicenseRequestNotFoundError: If the request does not exist
            ApprovedRequestDeletionError: If the request is approved and
                revoke_license is not set
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        request = await self.request_repository.find_by_id(command.request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {command.request_id} not found")
        if request.status == RequestStatus.APPROVED and not command.revoke_license:
            raise ApprovedRequestDeletionError()

        revoked = await self.unit_of_work.delete_request(
            request, revoke_licenses=command.revoke_license
        )

        for license in revoked:
            await LicenseCacheService.invalidate_accounts(license.account_ids)
            await event_bus.publish(
                LicenseDeleted(
                    license_id=license.id,
                    license_key=license.license_key,
                    deleted_by=command.actor.user_id,
                )
            )
        logger.info(
            "License request deleted",
            extra={
                "request_id": str(request.id),
                "status": request.status.value,
                "revoked_licenses": len(revoked),
            },
        )
        await event_bus.publish(
            LicenseRequestDeleted(
                request_id=request.id,
                deleted_by=command.actor.user_id,
                status=request.status.value,
                revoked_license_ids=[license.id for license in revoked],
            )
        )


class GetLicenseRequestHandler:
    """Handler for GetLicenseRequestQuery."""

    def __init__(self, request_repository: LicenseRequestRepository):
        self.request_repository = request_repository

    async def handle(self, query: GetLicenseRequestQuery) -> LicenseRequestDTO:
        request = await self.request_repository.find_by_id(query.request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {query.request_id} not found")
        if not (query.actor.is_admin or request.is_owned_by(query.actor.user_id)):
            raise NotRequestOwnerError()
        return LicenseRequestDTO.from_entity(request)


class ListLicenseRequestsHandler:
    """Handler for ListLicenseRequestsQuery."""

    def __init__(self, request_repository: LicenseRequestRepository):
        self.request_repository = request_repository

    async def handle(self, query: ListLicenseRequestsQuery) -> Page:
        """
        List requests, newest first.

        Returns:
            Page of LicenseRequestDTO
        """
        page_request = PageRequest.build(query.page, query.limit)
        is_admin = query.actor.is_admin
        requests, total = await self.request_repository.list(
            user_id=None if is_admin else query.actor.user_id,
            status=parse_request_status(query.status),
            search=((query.search or "").strip() or None) if is_admin else None,
            offset=page_request.offset,
            limit=page_request.limit,
        )
        return Page(
            items=[LicenseRequestDTO.from_entity(request) for request in requests],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )
