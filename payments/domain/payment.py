"""
Payment domain entity.

    pending  -> verified | rejected
    verified -> verified (retried verification) | rejected
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from core.domain.exceptions import (
    InvalidDecisionActionError,
    InvalidPaymentTransitionError,
    ValidationError,
)
from core.domain.value_objects import Money, PaymentStatus, utcnow

PROOF_MAX_LENGTH = 10000
REFERENCE_MAX_LENGTH = 255


class PaymentDecision(Enum):
    """Admin decisions on a payment."""

    VERIFY = "verify"
    REJECT = "reject"

    @classmethod
    def parse(cls, value) -> "PaymentDecision":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidDecisionActionError(
                f"Invalid action {value!r}; expected verify or reject"
            ) from exc


@dataclass(frozen=True)
class Payment:
    """
    Payment domain entity.

    Proof is free text: a transfer receipt, a transaction hash, or a link
    to an uploaded screenshot.
    """

    id: uuid.UUID
    user_id: int
    subscription_plan_id: uuid.UUID
    payment_method_id: uuid.UUID
    amount: Decimal
    currency: str
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime
    license_request_id: Optional[uuid.UUID] = None
    proof: str = ""
    transaction_reference: str = ""
    verified_by: Optional[int] = None
    verified_at: Optional[datetime] = None
    rejection_reason: str = ""

    def __post_init__(self):
        """Validate payment entity."""
        Money(self.amount, self.currency)
        if len(self.proof) > PROOF_MAX_LENGTH:
            raise ValidationError(f"Proof must be at most {PROOF_MAX_LENGTH} characters")
        if len(self.transaction_reference) > REFERENCE_MAX_LENGTH:
            raise ValidationError(
                f"Transaction reference must be at most {REFERENCE_MAX_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        user_id: int,
        license_request_id: uuid.UUID,
        subscription_plan_id: uuid.UUID,
        payment_method_id: uuid.UUID,
        money: Money,
        proof: Optional[str] = None,
        transaction_reference: Optional[str] = None,
        payment_id: Optional[uuid.UUID] = None,
    ) -> "Payment":
        """
        Create a new pending payment.

        Args:
            user_id: Payer (the request owner)
            license_request_id: Request being paid for
            subscription_plan_id: Plan being paid for
            payment_method_id: Method used
            money: Amount and currency
            proof: Free-text proof of payment
            transaction_reference: External transaction reference
            payment_id: Optional UUID (generated if not provided)

        Returns:
            Payment entity instance
        """
        now = utcnow()
        return cls(
            id=payment_id or uuid.uuid4(),
            user_id=user_id,
            license_request_id=license_request_id,
            subscription_plan_id=subscription_plan_id,
            payment_method_id=payment_method_id,
            amount=money.amount,
            currency=money.currency,
            status=PaymentStatus.PENDING,
            created_at=now,
            updated_at=now,
            proof=(proof or "").strip(),
            transaction_reference=(transaction_reference or "").strip(),
        )

    @property
    def money(self) -> Money:
        return Money(self.amount, self.currency)

    def verify(self, admin_id: int) -> "Payment":
        """
        Mark the payment verified.

        A verified payment may be verified again so that a license can still
        be issued after a verification that was recorded without one.

        Raises:
            InvalidPaymentTransitionError: If the payment was rejected
        """
        if self.status == PaymentStatus.REJECTED:
            raise InvalidPaymentTransitionError()
        now = utcnow()
        return replace(
            self,
            status=PaymentStatus.VERIFIED,
            verified_by=admin_id,
            verified_at=now,
            updated_at=now,
        )

    def reject(self, reason: str) -> "Payment":
        """
        Mark the payment rejected.

        Verifier fields are left as they were; the deciding admin is carried
        by the PaymentRejected event.

        Raises:
            InvalidPaymentTransitionError: If the payment was already rejected
        """
        if self.status == PaymentStatus.REJECTED:
            raise InvalidPaymentTransitionError()
        now = utcnow()
        return replace(
            self,
            status=PaymentStatus.REJECTED,
            rejection_reason=reason,
            updated_at=now,
        )
