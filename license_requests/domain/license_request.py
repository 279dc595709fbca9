"""
LicenseRequest domain entity.

State machine:

    create (no plan)   -> pending
    create (with plan) -> pending_payment
    pending            -> approved (approve) | rejected (reject)
    pending_payment    -> pending_payment (payment submitted)
                       -> payment_verified (payment verified)
                       -> approved (exempt, or payment verified with expiry)
                       -> rejected (payment rejected)
    payment_verified   -> approved (exempt, or verification retried with expiry)
                       -> rejected (payment rejected)

approved and rejected are terminal for admin decisions.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple

from core.domain.exceptions import (
    InvalidDecisionActionError,
    InvalidRequestTransitionError,
    MissingExpiryDateError,
    NotRequestOwnerError,
    ValidationError,
)
from core.domain.value_objects import RequestStatus, normalize_account_ids, utcnow
from licenses.domain.license import clean_name

REASON_MAX_LENGTH = 2000


class DecisionAction(Enum):
    """Admin decisions on a license request."""

    APPROVE = "approve"
    REJECT = "reject"
    EXEMPT = "exempt"

    @classmethod
    def parse(cls, value) -> "DecisionAction":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidDecisionActionError(
                f"Invalid action {value!r}; expected approve, reject or exempt"
            ) from exc


def clean_reason(value: Optional[str]) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError("Reason is required")
    if len(cleaned) > REASON_MAX_LENGTH:
        raise ValidationError(f"Reason must be at most {REASON_MAX_LENGTH} characters")
    return cleaned


@dataclass(frozen=True)
class LicenseRequest:
    """
    LicenseRequest domain entity.

    Immutable; every transition returns a new instance.
    """

    id: uuid.UUID
    user_id: int
    first_name: str
    last_name: str
    account_ids: Tuple[str, ...]
    reason: str
    status: RequestStatus
    created_at: datetime
    updated_at: datetime
    subscription_plan_id: Optional[uuid.UUID] = None
    payment_id: Optional[uuid.UUID] = None
    admin_notes: str = ""
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[int] = None
    rejected_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate request entity."""
        normalize_account_ids(self.account_ids)
        if self.approved_by is not None and self.rejected_by is not None:
            raise ValidationError("A request cannot be both approved and rejected")

    @classmethod
    def create(
        cls,
        user_id: int,
        first_name: str,
        last_name: str,
        account_ids: Iterable,
        reason: str,
        subscription_plan_id: Optional[uuid.UUID] = None,
        request_id: Optional[uuid.UUID] = None,
    ) -> "LicenseRequest":
        """
        Create a new LicenseRequest entity.

        Requests with a plan wait for payment; requests without one go
        straight to admin review.

        Args:
            user_id: Requester
            first_name: Licensee first name
            last_name: Licensee last name
            account_ids: Numeric account IDs to license
            reason: Why the license is requested
            subscription_plan_id: Optional plan to pay for
            request_id: Optional UUID (generated if not provided)

        Returns:
            LicenseRequest entity instance
        """
        now = utcnow()
        return cls(
            id=request_id or uuid.uuid4(),
            user_id=user_id,
            first_name=clean_name(first_name, "First name"),
            last_name=clean_name(last_name, "Last name"),
            account_ids=normalize_account_ids(account_ids),
            reason=clean_reason(reason),
            status=RequestStatus.PENDING_PAYMENT if subscription_plan_id else RequestStatus.PENDING,
            created_at=now,
            updated_at=now,
            subscription_plan_id=subscription_plan_id,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def _require_status(self, allowed, message: str) -> None:
        if self.status not in allowed:
            raise InvalidRequestTransitionError(message)

    def edit(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        account_ids: Optional[Iterable] = None,
        reason: Optional[str] = None,
    ) -> "LicenseRequest":
        """
        Owner edit of a pending request. None leaves a field unchanged.

        Raises:
            NotRequestOwnerError: If user_id is not the requester
            InvalidRequestTransitionError: If the request is not pending
        """
        if not self.is_owned_by(user_id):
            raise NotRequestOwnerError()
        self._require_status({RequestStatus.PENDING}, "Only pending requests can be edited")
        return replace(
            self,
            first_name=clean_name(first_name, "First name") if first_name is not None else self.first_name,
            last_name=clean_name(last_name, "Last name") if last_name is not None else self.last_name,
            account_ids=(
                normalize_account_ids(account_ids) if account_ids is not None else self.account_ids
            ),
            reason=clean_reason(reason) if reason is not None else self.reason,
            updated_at=utcnow(),
        )

    def _approved(self, admin_id: int, notes: Optional[str]) -> "LicenseRequest":
        now = utcnow()
        return replace(
            self,
            status=RequestStatus.APPROVED,
            approved_by=admin_id,
            approved_at=now,
            admin_notes=notes.strip() if notes else self.admin_notes,
            updated_at=now,
        )

    def approve(
        self, admin_id: int, expires_at: Optional[datetime], notes: Optional[str] = None
    ) -> "LicenseRequest":
        """
        Approve a pending request.

        Raises:
            InvalidRequestTransitionError: If the request is not pending
            MissingExpiryDateError: If no expiry date is given
        """
        self._require_status({RequestStatus.PENDING}, "License request has already been processed")
        if expires_at is None:
            raise MissingExpiryDateError()
        return self._approved(admin_id, notes)

    def exempt(
        self, admin_id: int, expires_at: Optional[datetime], notes: Optional[str] = None
    ) -> "LicenseRequest":
        """
        Approve a payment-gated request without payment verification.

        Raises:
            InvalidRequestTransitionError: If the request is not waiting on payment
            MissingExpiryDateError: If no expiry date is given
        """
        self._require_status(
            {RequestStatus.PENDING_PAYMENT, RequestStatus.PAYMENT_VERIFIED},
            "Only requests awaiting payment can be exempted",
        )
        if expires_at is None:
            raise MissingExpiryDateError()
        return self._approved(admin_id, notes)

    def reject(self, admin_id: int, notes: Optional[str] = None) -> "LicenseRequest":
        """
        Reject a pending request.

        Raises:
            InvalidRequestTransitionError: If the request is not pending
        """
        self._require_status({RequestStatus.PENDING}, "License request has already been processed")
        now = utcnow()
        return replace(
            self,
            status=RequestStatus.REJECTED,
            rejected_by=admin_id,
            rejected_at=now,
            admin_notes=notes.strip() if notes else self.admin_notes,
            updated_at=now,
        )

    def attach_payment(
        self, payment_id: uuid.UUID, subscription_plan_id: Optional[uuid.UUID] = None
    ) -> "LicenseRequest":
        """
        Link a submitted payment and wait for its verification.

        Resubmission on a rejected request reopens it. The paid plan replaces
        the plan selected at creation.

        Raises:
            InvalidRequestTransitionError: If the request is already approved
        """
        if self.status == RequestStatus.APPROVED:
            raise InvalidRequestTransitionError("License request has already been approved")
        return replace(
            self,
            payment_id=payment_id,
            subscription_plan_id=subscription_plan_id or self.subscription_plan_id,
            status=RequestStatus.PENDING_PAYMENT,
            rejected_by=None,
            rejected_at=None,
            updated_at=utcnow(),
        )

    def mark_payment_verified(self) -> "LicenseRequest":
        self._require_status(
            {RequestStatus.PENDING_PAYMENT, RequestStatus.PAYMENT_VERIFIED},
            "License request is not awaiting payment",
        )
        return replace(self, status=RequestStatus.PAYMENT_VERIFIED, updated_at=utcnow())

    def approve_after_payment(self, admin_id: int) -> "LicenseRequest":
        """Approve a request whose payment has been verified."""
        self._require_status(
            {RequestStatus.PAYMENT_VERIFIED}, "License request payment is not verified"
        )
        return self._approved(admin_id, None)

    def reject_payment(self, admin_id: int, reason: str) -> "LicenseRequest":
        """Reject a request because its payment could not be verified."""
        self._require_status(
            {RequestStatus.PENDING_PAYMENT, RequestStatus.PAYMENT_VERIFIED},
            "License request is not awaiting payment",
        )
        now = utcnow()
        return replace(
            self,
            status=RequestStatus.REJECTED,
            rejected_by=admin_id,
            rejected_at=now,
            admin_notes=reason,
            updated_at=now,
        )
