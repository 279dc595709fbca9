"""
Subscription plan commands.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class CreateSubscriptionPlanCommand:
    """Command to add a plan to the catalog."""

    actor: Actor
    name: str
    duration_months: int
    price: Decimal
    currency: Optional[str] = None
    description: str = ""
    is_active: bool = True


@dataclass
class UpdateSubscriptionPlanCommand:
    """Command to change a plan; None leaves a field unchanged."""

    actor: Actor
    plan_id: uuid.UUID
    name: Optional[str] = None
    duration_months: Optional[int] = None
    price: Optional[Decimal] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
