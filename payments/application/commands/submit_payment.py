"""
SubmitPaymentCommand.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class SubmitPaymentCommand:
    """Command for a request owner to submit proof of payment."""

    actor: Actor
    request_id: uuid.UUID
    subscription_plan_id: uuid.UUID
    payment_method_id: uuid.UUID
    amount: Decimal
    proof: str
    currency: Optional[str] = None
    transaction_reference: Optional[str] = None
