"""
Payment method commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.domain.value_objects import Actor


@dataclass
class CreatePaymentMethodCommand:
    """Command to add a payment method to the catalog."""

    actor: Actor
    name: str
    method_type: str
    instructions: str
    details: Dict[str, Any] = field(default_factory=dict)
    is_active: bool = True


@dataclass
class UpdatePaymentMethodCommand:
    """Command to change a payment method; None leaves a field unchanged."""

    actor: Actor
    method_id: uuid.UUID
    name: Optional[str] = None
    method_type: Optional[str] = None
    instructions: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None
