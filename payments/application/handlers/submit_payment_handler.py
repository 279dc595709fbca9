"""
Payment submission by a request owner.
"""
import logging

from catalog.ports.payment_method_repository import PaymentMethodRepository
from catalog.ports.subscription_plan_repository import SubscriptionPlanRepository
from core.domain.exceptions import (
    InactiveCatalogEntryError,
    LicenseRequestNotFoundError,
    NotRequestOwnerError,
    PaymentMethodNotFoundError,
    SubscriptionPlanNotFoundError,
)
from core.domain.value_objects import Money
from core.infrastructure.events import event_bus
from core.metrics import payments_submitted_total
from license_requests.ports.license_request_repository import LicenseRequestRepository
from license_requests.ports.unit_of_work import LifecycleChange, LifecycleUnitOfWork
from payments.application.commands.submit_payment import SubmitPaymentCommand
from payments.application.dto.payment_dto import PaymentDTO
from payments.domain.events import PaymentSubmitted
from payments.domain.payment import Payment

logger = logging.getLogger(__name__)


class SubmitPaymentHandler:
    """Handler for SubmitPaymentCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        plan_repository: SubscriptionPlanRepository,
        method_repository: PaymentMethodRepository,
        unit_of_work: LifecycleUnitOfWork,
    ):
        """Initialize handler with repositories and unit of work."""
        self.request_repository = request_repository
        self.plan_repository = plan_repository
        self.method_repository = method_repository
        self.unit_of_work = unit_of_work

    async def handle(self, command: SubmitPaymentCommand) -> PaymentDTO:
        """
        Record a pending payment and link it to the request.

        The request moves to pending_payment, which also reopens a request
        whose earlier payment was rejected. The amount is not checked against
        the plan price; an admin checks it during verification.

        Args:
            command: SubmitPaymentCommand

        Returns:
            PaymentDTO of the stored payment

        Raises:
            LicenseRequestNotFoundError: If the request does not exist
            NotRequestOwnerError: If the caller is not the requester
            SubscriptionPlanNotFoundError: If the plan does not exist
            PaymentMethodNotFoundError: If the method does not exist
            InvalidPaymentAmountError: If amount or currency is malformed
            InvalidRequestTransitionError: If the request is already approved
        """
        request = await self.request_repository.find_by_id(command.request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {command.request_id} not found")
        if not request.is_owned_by(command.actor.user_id):
            raise NotRequestOwnerError()

        plan = await self.plan_repository.find_by_id(command.subscription_plan_id)
        if not plan:
            raise SubscriptionPlanNotFoundError(
                f"Subscription plan {command.subscription_plan_id} not found"
            )
        if not plan.is_active:
            raise InactiveCatalogEntryError(f"Subscription plan {plan.name} is not active")
        method = await self.method_repository.find_by_id(command.payment_method_id)
        if not method:
            raise PaymentMethodNotFoundError(
                f"Payment method {command.payment_method_id} not found"
            )
        if not method.is_active:
            raise InactiveCatalogEntryError(f"Payment method {method.name} is not active")

        money = Money(command.amount, (command.currency or plan.currency).upper())
        payment = Payment.create(
            user_id=command.actor.user_id,
            license_request_id=request.id,
            subscription_plan_id=plan.id,
            payment_method_id=method.id,
            money=money,
            proof=command.proof,
            transaction_reference=command.transaction_reference,
        )
        linked = request.attach_payment(payment.id, subscription_plan_id=plan.id)
        result = await self.unit_of_work.commit(
            LifecycleChange(
                request=linked,
                expected_request_statuses=(request.status,),
                new_payment=payment,
            )
        )

        payments_submitted_total.labels(currency=money.currency).inc()
        logger.info(
            "Payment submitted",
            extra={
                "payment_id": str(payment.id),
                "request_id": str(request.id),
                "previous_status": request.status.value,
            },
        )
        await event_bus.publish(
            PaymentSubmitted(
                payment_id=result.payment.id,
                request_id=request.id,
                user_id=command.actor.user_id,
                amount=result.payment.amount,
                currency=result.payment.currency,
            )
        )
        return PaymentDTO.from_entity(result.payment)
