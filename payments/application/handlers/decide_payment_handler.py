"""
Admin verification and rejection of payments.
"""
import logging

from core.conf import licensing_setting
from core.domain.exceptions import (
    AdminRequiredError,
    LicenseRequestNotFoundError,
    PaymentNotFoundError,
)
from core.infrastructure.events import event_bus
from core.metrics import payment_decisions_total
from license_requests.application.dto.license_request_dto import LicenseRequestDTO
from license_requests.domain.events import LicenseRequestApproved, LicenseRequestRejected
from license_requests.ports.license_request_repository import LicenseRequestRepository
from license_requests.ports.unit_of_work import LifecycleChange, LifecycleUnitOfWork
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_issuance_service import LicenseIssuanceService
from payments.application.commands.decide_payment import DecidePaymentCommand
from payments.application.dto.payment_dto import PaymentDecisionDTO, PaymentDTO
from payments.domain.events import PaymentRejected, PaymentVerified
from payments.domain.payment import PaymentDecision
from payments.ports.payment_repository import PaymentRepository

logger = logging.getLogger(__name__)


class DecidePaymentHandler:
    """Handler for DecidePaymentCommand."""

    def __init__(
        self,
        payment_repository: PaymentRepository,
        request_repository: LicenseRequestRepository,
        unit_of_work: LifecycleUnitOfWork,
    ):
        """Initialize handler with repositories and unit of work."""
        self.payment_repository = payment_repository
        self.request_repository = request_repository
        self.unit_of_work = unit_of_work

    async def handle(self, command: DecidePaymentCommand) -> PaymentDecisionDTO:
        """
        Verify or reject a payment.

        Payment, request and license changes are committed together.

        Args:
            command: DecidePaymentCommand

        Returns:
            PaymentDecisionDTO with the payment, its request and any issued license

        Raises:
            AdminRequiredError: If the caller is not an admin
            InvalidDecisionActionError: If the action is unknown
            PaymentNotFoundError: If the payment does not exist
            LicenseRequestNotFoundError: If a license should be issued but the
                request no longer exists
            InvalidPaymentTransitionError: If the payment was already rejected
            InvalidRequestTransitionError: If the request is not awaiting payment
            ConcurrentUpdateError: If another decision won the race
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        action = PaymentDecision.parse(command.action)

        payment = await self.payment_repository.find_by_id(command.payment_id)
        if not payment:
            raise PaymentNotFoundError(f"Payment {command.payment_id} not found")
        request = None
        if payment.license_request_id:
            request = await self.request_repository.find_by_id(payment.license_request_id)

        if action == PaymentDecision.VERIFY:
            return await self._verify(command, payment, request)
        return await self._reject(command, payment, request)

    async def _verify(self, command, payment, request) -> PaymentDecisionDTO:
        admin_id = command.actor.user_id
        if request is None and command.expires_at is not None:
            raise LicenseRequestNotFoundError(
                f"Payment {payment.id} has no license request to approve"
            )

        verified = payment.verify(admin_id)
        updated_request = None
        new_license = None
        if request is not None:
            updated_request = request.mark_payment_verified()
            if command.expires_at is not None:
                updated_request = updated_request.approve_after_payment(admin_id)
                new_license = LicenseIssuanceService.prepare(
                    first_name=request.first_name,
                    last_name=request.last_name,
                    account_ids=request.account_ids,
                    expires_at=command.expires_at,
                    issued_by=admin_id,
                    source="payment",
                    request_id=request.id,
                    metadata={"payment_id": str(payment.id)},
                )

        result = await self.unit_of_work.commit(
            LifecycleChange(
                request=updated_request,
                expected_request_statuses=(request.status,) if request else (),
                payment=verified,
                expected_payment_statuses=(payment.status,),
                new_license=new_license,
            )
        )

        issued = result.license is not None
        payment_decisions_total.labels(action="verify", issued_license=str(issued).lower()).inc()
        logger.info(
            "Payment verified",
            extra={
                "payment_id": str(payment.id),
                "request_id": str(request.id) if request else None,
                "admin_id": admin_id,
                "license_issued": issued,
            },
        )
        if issued:
            await LicenseIssuanceService.announce(
                result.license,
                source="payment",
                issued_by=admin_id,
                recipient_user_id=request.user_id,
            )
            await event_bus.publish(
                LicenseRequestApproved(
                    request_id=request.id,
                    approved_by=admin_id,
                    action="payment",
                    license_id=result.license.id,
                )
            )
        await event_bus.publish(
            PaymentVerified(
                payment_id=payment.id,
                verified_by=admin_id,
                user_id=payment.user_id,
                amount=payment.amount,
                currency=payment.currency,
                request_id=request.id if request else None,
                license_id=result.license.id if issued else None,
            )
        )
        return PaymentDecisionDTO(
            payment=PaymentDTO.from_entity(result.payment),
            request=LicenseRequestDTO.from_entity(result.request) if result.request else None,
            license=LicenseDTO.from_entity(result.license) if issued else None,
        )

    async def _reject(self, command, payment, request) -> PaymentDecisionDTO:
        admin_id = command.actor.user_id
        reason = (command.reason or "").strip() or licensing_setting(
            "DEFAULT_PAYMENT_REJECTION_REASON"
        )

        rejected = payment.reject(reason)
        updated_request = request.reject_payment(admin_id, reason) if request else None
        result = await self.unit_of_work.commit(
            LifecycleChange(
                request=updated_request,
                expected_request_statuses=(request.status,) if request else (),
                payment=rejected,
                expected_payment_statuses=(payment.status,),
            )
        )

        payment_decisions_total.labels(action="reject", issued_license="false").inc()
        logger.info(
            "Payment rejected",
            extra={
                "payment_id": str(payment.id),
                "request_id": str(request.id) if request else None,
                "admin_id": admin_id,
            },
        )
        if request is not None:
            await event_bus.publish(
                LicenseRequestRejected(request_id=request.id, rejected_by=admin_id, notes=reason)
            )
        await event_bus.publish(
            PaymentRejected(
                payment_id=payment.id,
                rejected_by=admin_id,
                user_id=payment.user_id,
                reason=reason,
                request_id=request.id if request else None,
            )
        )
        return PaymentDecisionDTO(
            payment=PaymentDTO.from_entity(result.payment),
            request=LicenseRequestDTO.from_entity(result.request) if result.request else None,
        )
