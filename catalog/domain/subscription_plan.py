"""
SubscriptionPlan domain entity.
"""
import re
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import CURRENCY_PATTERN, utcnow


def _to_price(value) -> Decimal:
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid price: {value!r}") from exc
    if not price.is_finite():
        raise ValidationError(f"Invalid price: {value!r}")
    return price


@dataclass(frozen=True)
class SubscriptionPlan:
    """
    SubscriptionPlan domain entity.

    A priced license duration users can pick when requesting a license.
    """

    id: uuid.UUID
    name: str
    duration_months: int
    price: Decimal
    currency: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate plan entity."""
        if not self.name or not self.name.strip():
            raise ValidationError("Plan name cannot be empty")
        if len(self.name) > 255:
            raise ValidationError("Plan name too long")
        if not isinstance(self.duration_months, int) or self.duration_months < 1:
            raise ValidationError("Plan duration must be at least one month")
        if self.price < 0:
            raise ValidationError("Plan price cannot be negative")
        if not re.match(CURRENCY_PATTERN, self.currency or ""):
            raise ValidationError(f"Invalid currency: {self.currency!r}")

    @classmethod
    def create(
        cls,
        name: str,
        duration_months: int,
        price,
        currency: str,
        description: str = "",
        is_active: bool = True,
        plan_id: Optional[uuid.UUID] = None,
    ) -> "SubscriptionPlan":
        """
        Create a new SubscriptionPlan entity.

        Args:
            name: Unique display name
            duration_months: License duration granted by the plan
            price: Plan price
            currency: ISO currency code
            description: Optional description
            is_active: Whether users can pick the plan
            plan_id: Optional UUID (generated if not provided)

        Returns:
            SubscriptionPlan entity instance
        """
        now = utcnow()
        return cls(
            id=plan_id or uuid.uuid4(),
            name=(name or "").strip(),
            duration_months=duration_months,
            price=_to_price(price),
            currency=(currency or "").upper(),
            description=(description or "").strip(),
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def update(self, **changes) -> "SubscriptionPlan":
        """Return a copy with the given non-None fields changed."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "price" in changes:
            changes["price"] = _to_price(changes["price"])
        if "currency" in changes:
            changes["currency"] = changes["currency"].upper()
        return replace(self, updated_at=utcnow(), **changes)
