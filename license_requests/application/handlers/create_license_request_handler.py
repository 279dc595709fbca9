"""
License request creation.
"""
import logging

from catalog.ports.subscription_plan_repository import SubscriptionPlanRepository
from core.domain.exceptions import (
    InactiveCatalogEntryError,
    OpenLicenseRequestExistsError,
    SubscriptionPlanNotFoundError,
)
from core.infrastructure.events import event_bus
from core.metrics import license_requests_created_total
from license_requests.application.commands.create_license_request import (
    CreateLicenseRequestCommand,
)
from license_requests.application.dto.license_request_dto import LicenseRequestDTO
from license_requests.domain.events import LicenseRequestCreated
from license_requests.domain.license_request import LicenseRequest
from license_requests.ports.license_request_repository import LicenseRequestRepository

logger = logging.getLogger(__name__)


class CreateLicenseRequestHandler:
    """Handler for CreateLicenseRequestCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        plan_repository: SubscriptionPlanRepository,
    ):
        """Initialize handler with repositories."""
        self.request_repository = request_repository
        self.plan_repository = plan_repository

    async def handle(self, command: CreateLicenseRequestCommand) -> LicenseRequestDTO:
        """
        Submit a license request for the calling user.

        Steps:
        1. Validate names, account IDs and reason
        2. Refuse if the user already has an open request
        3. Check the selected plan exists and is active
        4. Store the request (pending, or pending_payment with a plan)

        Args:
            command: CreateLicenseRequestCommand

        Returns:
            LicenseRequestDTO of the stored request

        Raises:
            ValidationError: If input is invalid
            OpenLicenseRequestExistsError: If an open request already exists
            SubscriptionPlanNotFoundError: If the plan does not exist
        """
        request = LicenseRequest.create(
            user_id=command.actor.user_id,
            first_name=command.first_name,
            last_name=command.last_name,
            account_ids=command.account_ids,
            reason=command.reason,
            subscription_plan_id=command.subscription_plan_id,
        )

        if await self.request_repository.find_open_by_user(command.actor.user_id):
            raise OpenLicenseRequestExistsError()

        if command.subscription_plan_id:
            plan = await self.plan_repository.find_by_id(command.subscription_plan_id)
            if not plan:
                raise SubscriptionPlanNotFoundError(
                    f"Subscription plan {command.subscription_plan_id} not found"
                )
            if not plan.is_active:
                raise InactiveCatalogEntryError(f"Subscription plan {plan.name} is not active")

        # The database constraint still catches a concurrent submission.
        stored = await self.request_repository.add(request)

        license_requests_created_total.labels(initial_status=stored.status.value).inc()
        logger.info(
            "License request created",
            extra={
                "request_id": str(stored.id),
                "user_id": stored.user_id,
                "status": stored.status.value,
            },
        )
        await event_bus.publish(
            LicenseRequestCreated(
                request_id=stored.id,
                user_id=stored.user_id,
                account_ids=stored.account_ids,
                status=stored.status.value,
                subscription_plan_id=stored.subscription_plan_id,
            )
        )
        return LicenseRequestDTO.from_entity(stored)
