"""
Catalog handlers.

Reads are open to every caller; writes require admin capability.
"""
import logging
from typing import List

from catalog.application.commands.payment_method_commands import (
    CreatePaymentMethodCommand,
    UpdatePaymentMethodCommand,
)
from catalog.application.commands.subscription_plan_commands import (
    CreateSubscriptionPlanCommand,
    UpdateSubscriptionPlanCommand,
)
from catalog.application.dto.catalog_dto import PaymentMethodDTO, SubscriptionPlanDTO
from catalog.application.queries.list_catalog import (
    ListPaymentMethodsQuery,
    ListSubscriptionPlansQuery,
)
from catalog.domain.payment_method import PaymentMethod
from catalog.domain.subscription_plan import SubscriptionPlan
from catalog.ports.payment_method_repository import PaymentMethodRepository
from catalog.ports.subscription_plan_repository import SubscriptionPlanRepository
from core.conf import licensing_setting
from core.domain.exceptions import (
    AdminRequiredError,
    PaymentMethodNotFoundError,
    SubscriptionPlanNotFoundError,
)

logger = logging.getLogger(__name__)


def _can_see_inactive(query) -> bool:
    return bool(query.include_inactive and query.actor and query.actor.is_admin)


class ListSubscriptionPlansHandler:
    """Handler for ListSubscriptionPlansQuery."""

    def __init__(self, plan_repository: SubscriptionPlanRepository):
        self.plan_repository = plan_repository

    async def handle(self, query: ListSubscriptionPlansQuery) -> List[SubscriptionPlanDTO]:
        plans = await self.plan_repository.list(active_only=not _can_see_inactive(query))
        return [SubscriptionPlanDTO.from_entity(plan) for plan in plans]


class ListPaymentMethodsHandler:
    """Handler for ListPaymentMethodsQuery."""

    def __init__(self, method_repository: PaymentMethodRepository):
        self.method_repository = method_repository

    async def handle(self, query: ListPaymentMethodsQuery) -> List[PaymentMethodDTO]:
        methods = await self.method_repository.list(active_only=not _can_see_inactive(query))
        return [PaymentMethodDTO.from_entity(method) for method in methods]


class CreateSubscriptionPlanHandler:
    """Handler for CreateSubscriptionPlanCommand."""

    def __init__(self, plan_repository: SubscriptionPlanRepository):
        self.plan_repository = plan_repository

    async def handle(self, command: CreateSubscriptionPlanCommand) -> SubscriptionPlanDTO:
        """
        Add a plan to the catalog.

        Raises:
            AdminRequiredError: If the caller is not an admin
            CatalogEntryExistsError: If the name is taken
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        plan = SubscriptionPlan.create(
            name=command.name,
            duration_months=command.duration_months,
            price=command.price,
            currency=command.currency or licensing_setting("DEFAULT_CURRENCY"),
            description=command.description,
            is_active=command.is_active,
        )
        saved = await self.plan_repository.save(plan)
        logger.info("Subscription plan created", extra={"plan_id": str(saved.id)})
        return SubscriptionPlanDTO.from_entity(saved)


class UpdateSubscriptionPlanHandler:
    """Handler for UpdateSubscriptionPlanCommand."""

    def __init__(self, plan_repository: SubscriptionPlanRepository):
        self.plan_repository = plan_repository

    async def handle(self, command: UpdateSubscriptionPlanCommand) -> SubscriptionPlanDTO:
        if not command.actor.is_admin:
            raise AdminRequiredError()
        plan = await self.plan_repository.find_by_id(command.plan_id)
        if not plan:
            raise SubscriptionPlanNotFoundError(f"Subscription plan {command.plan_id} not found")
        updated = plan.update(
            name=command.name,
            duration_months=command.duration_months,
            price=command.price,
            currency=command.currency,
            description=command.description,
            is_active=command.is_active,
        )
        saved = await self.plan_repository.save(updated)
        logger.info("Subscription plan updated", extra={"plan_id": str(saved.id)})
        return SubscriptionPlanDTO.from_entity(saved)


class CreatePaymentMethodHandler:
    """Handler for CreatePaymentMethodCommand."""

    def __init__(self, method_repository: PaymentMethodRepository):
        self.method_repository = method_repository

    async def handle(self, command: CreatePaymentMethodCommand) -> PaymentMethodDTO:
        """
        Add a payment method to the catalog.

        Raises:
            AdminRequiredError: If the caller is not an admin
            InvalidPaymentMethodDetailsError: If details do not fit the type
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        method = PaymentMethod.create(
            name=command.name,
            method_type=command.method_type,
            details=command.details,
            instructions=command.instructions,
            is_active=command.is_active,
        )
        saved = await self.method_repository.save(method)
        logger.info("Payment method created", extra={"payment_method_id": str(saved.id)})
        return PaymentMethodDTO.from_entity(saved)


class UpdatePaymentMethodHandler:
    """Handler for UpdatePaymentMethodCommand."""

    def __init__(self, method_repository: PaymentMethodRepository):
        self.method_repository = method_repository

    async def handle(self, command: UpdatePaymentMethodCommand) -> PaymentMethodDTO:
        if not command.actor.is_admin:
            raise AdminRequiredError()
        method = await self.method_repository.find_by_id(command.method_id)
        if not method:
            raise PaymentMethodNotFoundError(f"Payment method {command.method_id} not found")
        updated = method.update(
            name=command.name,
            method_type=command.method_type,
            details=command.details,
            instructions=command.instructions,
            is_active=command.is_active,
        )
        saved = await self.method_repository.save(updated)
        logger.info("Payment method updated", extra={"payment_method_id": str(saved.id)})
        return PaymentMethodDTO.from_entity(saved)
