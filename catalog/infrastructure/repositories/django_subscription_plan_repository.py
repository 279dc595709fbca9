"""
Django implementation of SubscriptionPlanRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from catalog.domain.subscription_plan import SubscriptionPlan
from catalog.infrastructure.models import SubscriptionPlan as SubscriptionPlanModel
from catalog.ports.subscription_plan_repository import SubscriptionPlanRepository
from core.domain.exceptions import CatalogEntryExistsError


class DjangoSubscriptionPlanRepository(SubscriptionPlanRepository):
    """Django ORM implementation of SubscriptionPlanRepository."""

    def _to_domain(self, model: SubscriptionPlanModel) -> SubscriptionPlan:
        return SubscriptionPlan(
            id=model.id,
            name=model.name,
            duration_months=model.duration_months,
            price=model.price,
            currency=model.currency,
            description=model.description,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, plan: SubscriptionPlan) -> SubscriptionPlanModel:
        """
        Convert domain entity to Django model.

        Args:
            plan: SubscriptionPlan domain entity

        Returns:
            Django SubscriptionPlan model (unsaved changes applied)
        """
        model, created = SubscriptionPlanModel.objects.get_or_create(
            id=plan.id,
            defaults={
                "name": plan.name,
                "duration_months": plan.duration_months,
                "price": plan.price,
                "currency": plan.currency,
                "description": plan.description,
                "is_active": plan.is_active,
                "created_at": plan.created_at,
                "updated_at": plan.updated_at,
            },
        )
        if not created:
            model.name = plan.name
            model.duration_months = plan.duration_months
            model.price = plan.price
            model.currency = plan.currency
            model.description = plan.description
            model.is_active = plan.is_active
            model.updated_at = plan.updated_at
        return model

    @sync_to_async
    def save(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        """
        Save a plan.

        Raises:
            CatalogEntryExistsError: If the name is taken
        """
        try:
            with transaction.atomic():
                model = self._to_model(plan)
                model.save()
        except IntegrityError as exc:
            raise CatalogEntryExistsError(f"A plan named {plan.name!r} already exists") from exc
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, plan_id: uuid.UUID) -> Optional[SubscriptionPlan]:
        try:
            return self._to_domain(SubscriptionPlanModel.objects.get(id=plan_id))
        except SubscriptionPlanModel.DoesNotExist:
            return None

    @sync_to_async
    def list(self, active_only: bool = True) -> List[SubscriptionPlan]:
        queryset = SubscriptionPlanModel.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return [self._to_domain(m) for m in queryset.order_by("duration_months", "name")]
