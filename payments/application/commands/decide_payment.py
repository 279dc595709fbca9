"""
DecidePaymentCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class DecidePaymentCommand:
    """
    Command for an admin to verify or reject a payment.

    Verifying with expires_at also approves the linked request and issues
    its license.
    """

    actor: Actor
    payment_id: uuid.UUID
    action: str
    expires_at: Optional[datetime] = None
    reason: Optional[str] = None
