"""
Admin decisions on license requests.
"""
import logging

from core.domain.exceptions import AdminRequiredError, LicenseRequestNotFoundError
from core.infrastructure.events import event_bus
from core.metrics import license_request_decisions_total
from license_requests.application.commands.decide_license_request import (
    DecideLicenseRequestCommand,
)
from license_requests.application.dto.license_request_dto import (
    LicenseRequestDTO,
    RequestDecisionDTO,
)
from license_requests.domain.events import LicenseRequestApproved, LicenseRequestRejected
from license_requests.domain.license_request import DecisionAction
from license_requests.ports.license_request_repository import LicenseRequestRepository
from license_requests.ports.unit_of_work import LifecycleChange, LifecycleUnitOfWork
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_issuance_service import LicenseIssuanceService

logger = logging.getLogger(__name__)


class DecideLicenseRequestHandler:
    """Handler for DecideLicenseRequestCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        unit_of_work: LifecycleUnitOfWork,
    ):
        """Initialize handler with repository and unit of work."""
        self.request_repository = request_repository
        self.unit_of_work = unit_of_work

    async def handle(self, command: DecideLicenseRequestCommand) -> RequestDecisionDTO:
        """
        Approve, reject or exempt a request.

        approve and exempt issue a license in the same transaction as the
        status change. A second decision on the same request fails with
        InvalidState, so a request never issues two licenses.

        Args:
            command: DecideLicenseRequestCommand

        Returns:
            RequestDecisionDTO with the updated request and the issued license

        Raises:
            AdminRequiredError: If the caller is not an admin
            InvalidDecisionActionError: If the action is unknown
            LicenseRequestNotFoundError: If the request does not exist
            InvalidRequestTransitionError: If the action is not legal for the status
            MissingExpiryDateError: If approve/exempt has no expiry date
            ConcurrentUpdateError: If another decision won the race
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        action = DecisionAction.parse(command.action)

        request = await self.request_repository.find_by_id(command.request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {command.request_id} not found")
        admin_id = command.actor.user_id

        if action == DecisionAction.REJECT:
            rejected = request.reject(admin_id, command.admin_notes)
            result = await self.unit_of_work.commit(
                LifecycleChange(request=rejected, expected_request_statuses=(request.status,))
            )
            license_request_decisions_total.labels(action=action.value).inc()
            logger.info(
                "License request rejected",
                extra={"request_id": str(request.id), "admin_id": admin_id},
            )
            await event_bus.publish(
                LicenseRequestRejected(
                    request_id=request.id,
                    rejected_by=admin_id,
                    notes=result.request.admin_notes,
                )
            )
            return RequestDecisionDTO(request=LicenseRequestDTO.from_entity(result.request))

        if action == DecisionAction.APPROVE:
            approved = request.approve(admin_id, command.expires_at, command.admin_notes)
        else:
            approved = request.exempt(admin_id, command.expires_at, command.admin_notes)

        license = LicenseIssuanceService.prepare(
            first_name=request.first_name,
            last_name=request.last_name,
            account_ids=request.account_ids,
            expires_at=command.expires_at,
            issued_by=admin_id,
            source=action.value,
            request_id=request.id,
        )
        result = await self.unit_of_work.commit(
            LifecycleChange(
                request=approved,
                expected_request_statuses=(request.status,),
                new_license=license,
            )
        )

        license_request_decisions_total.labels(action=action.value).inc()
        logger.info(
            "License request approved",
            extra={
                "request_id": str(request.id),
                "admin_id": admin_id,
                "action": action.value,
                "previous_status": request.status.value,
            },
        )
        await LicenseIssuanceService.announce(
            result.license,
            source=action.value,
            issued_by=admin_id,
            recipient_user_id=request.user_id,
        )
        await event_bus.publish(
            LicenseRequestApproved(
                request_id=request.id,
                approved_by=admin_id,
                action=action.value,
                license_id=result.license.id,
            )
        )
        return RequestDecisionDTO(
            request=LicenseRequestDTO.from_entity(result.request),
            license=LicenseDTO.from_entity(result.license),
        )
