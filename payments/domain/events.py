"""
Payment domain events.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent
from core.domain.value_objects import utcnow


class PaymentSubmitted(DomainEvent):
    """Event raised when a user submits a payment for review."""

    def __init__(
        self,
        payment_id: uuid.UUID,
        request_id: uuid.UUID,
        user_id: int,
        amount: Decimal,
        currency: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(payment_id),
            event_type="PaymentSubmitted",
        )
        self.payment_id = payment_id
        self.request_id = request_id
        self.user_id = user_id
        self.amount = amount
        self.currency = currency

    def payload(self) -> Dict[str, Any]:
        return {
            "payment_id": str(self.payment_id),
            "request_id": str(self.request_id),
            "actor_id": self.user_id,
            "amount": str(self.amount),
            "currency": self.currency,
        }


class PaymentVerified(DomainEvent):
    """Event raised when an admin verifies a payment."""

    def __init__(
        self,
        payment_id: uuid.UUID,
        verified_by: int,
        user_id: int,
        amount: Decimal,
        currency: str,
        request_id: Optional[uuid.UUID] = None,
        license_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize PaymentVerified event.

        Args:
            payment_id: Payment UUID
            verified_by: Admin user id
            user_id: Payer, notified of the verification
            amount: Verified amount
            currency: Currency code
            request_id: Linked request, if it still exists
            license_id: License issued by the verification, if any
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(payment_id),
            event_type="PaymentVerified",
        )
        self.payment_id = payment_id
        self.verified_by = verified_by
        self.user_id = user_id
        self.amount = amount
        self.currency = currency
        self.request_id = request_id
        self.license_id = license_id

    def payload(self) -> Dict[str, Any]:
        return {
            "payment_id": str(self.payment_id),
            "actor_id": self.verified_by,
            "recipient_user_id": self.user_id,
            "amount": str(self.amount),
            "currency": self.currency,
            "request_id": str(self.request_id) if self.request_id else None,
            "license_id": str(self.license_id) if self.license_id else None,
        }


class PaymentRejected(DomainEvent):
    """Event raised when an admin rejects a payment."""

    def __init__(
        self,
        payment_id: uuid.UUID,
        rejected_by: int,
        user_id: int,
        reason: str,
        request_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(payment_id),
            event_type="PaymentRejected",
        )
        self.payment_id = payment_id
        self.rejected_by = rejected_by
        self.user_id = user_id
        self.reason = reason
        self.request_id = request_id

    def payload(self) -> Dict[str, Any]:
        return {
            "payment_id": str(self.payment_id),
            "actor_id": self.rejected_by,
            "recipient_user_id": self.user_id,
            "reason": self.reason,
            "request_id": str(self.request_id) if self.request_id else None,
        }
