"""
Catalog DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from catalog.domain.payment_method import PaymentMethod, details_to_dict
from catalog.domain.subscription_plan import SubscriptionPlan


@dataclass
class SubscriptionPlanDTO:
    """DTO for a subscription plan."""

    id: uuid.UUID
    name: str
    duration_months: int
    price: Decimal
    currency: str
    description: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, plan: SubscriptionPlan) -> "SubscriptionPlanDTO":
        return cls(
            id=plan.id,
            name=plan.name,
            duration_months=plan.duration_months,
            price=plan.price,
            currency=plan.currency,
            description=plan.description,
            is_active=plan.is_active,
            created_at=plan.created_at,
        )


@dataclass
class PaymentMethodDTO:
    """DTO for a payment method."""

    id: uuid.UUID
    name: str
    method_type: str
    details: Dict[str, Any]
    instructions: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, method: PaymentMethod) -> "PaymentMethodDTO":
        return cls(
            id=method.id,
            name=method.name,
            method_type=method.method_type.value,
            details=details_to_dict(method.details),
            instructions=method.instructions,
            is_active=method.is_active,
            created_at=method.created_at,
        )
