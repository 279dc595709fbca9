"""
Payment DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from license_requests.application.dto.license_request_dto import LicenseRequestDTO
from licenses.application.dto.license_dto import LicenseDTO
from payments.domain.payment import Payment


@dataclass
class PaymentDTO:
    """DTO for payment information."""

    id: uuid.UUID
    user_id: int
    license_request_id: Optional[uuid.UUID]
    subscription_plan_id: uuid.UUID
    payment_method_id: uuid.UUID
    amount: Decimal
    currency: str
    proof: str
    transaction_reference: str
    status: str
    verified_by: Optional[int]
    verified_at: Optional[datetime]
    rejection_reason: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            user_id=payment.user_id,
            license_request_id=payment.license_request_id,
            subscription_plan_id=payment.subscription_plan_id,
            payment_method_id=payment.payment_method_id,
            amount=payment.amount,
            currency=payment.currency,
            proof=payment.proof,
            transaction_reference=payment.transaction_reference,
            status=payment.status.value,
            verified_by=payment.verified_by,
            verified_at=payment.verified_at,
            rejection_reason=payment.rejection_reason,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


@dataclass
class PaymentDecisionDTO:
    """Outcome of a payment decision."""

    payment: PaymentDTO
    request: Optional[LicenseRequestDTO] = None
    license: Optional[LicenseDTO] = None
