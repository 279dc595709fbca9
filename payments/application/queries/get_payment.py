"""
GetPaymentQuery.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class GetPaymentQuery:
    """Query to fetch one payment (payer or admin)."""

    actor: Actor
    payment_id: uuid.UUID
