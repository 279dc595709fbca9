"""
Unit tests for LicenseRequest domain entity.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    InvalidDecisionActionError,
    InvalidRequestTransitionError,
    MissingExpiryDateError,
    NotRequestOwnerError,
    ValidationError,
)
from core.domain.value_objects import RequestStatus
from license_requests.domain.license_request import DecisionAction, LicenseRequest

OWNER = 1
ADMIN = 99
EXPIRY = datetime.now(timezone.utc) + timedelta(days=30)


def _request(plan_id=None, **kwargs):
    return LicenseRequest.create(
        user_id=OWNER,
        first_name="Ada",
        last_name="Lovelace",
        account_ids=kwargs.pop("account_ids", ["1001"]),
        reason=kwargs.pop("reason", "Live account"),
        subscription_plan_id=plan_id,
    )


class TestCreate:
    """Tests for request creation."""

    def test_without_plan_is_pending(self):
        request = _request()
        assert request.status == RequestStatus.PENDING
        assert request.subscription_plan_id is None

    def test_with_plan_awaits_payment(self):
        plan_id = uuid.uuid4()
        request = _request(plan_id=plan_id)
        assert request.status == RequestStatus.PENDING_PAYMENT
        assert request.subscription_plan_id == plan_id

    def test_reason_required(self):
        with pytest.raises(ValidationError):
            _request(reason="   ")

    def test_reason_length_limit(self):
        with pytest.raises(ValidationError):
            _request(reason="x" * 2001)

    def test_cannot_be_both_approved_and_rejected(self):
        with pytest.raises(ValidationError):
            replace(_request(), approved_by=ADMIN, rejected_by=ADMIN)


class TestEdit:
    """Tests for owner edits."""

    def test_owner_edits_pending_request(self):
        edited = _request().edit(OWNER, first_name="Grace", account_ids=["2", "3"])
        assert edited.first_name == "Grace"
        assert edited.last_name == "Lovelace"
        assert edited.account_ids == ("2", "3")

    def test_non_owner_cannot_edit(self):
        with pytest.raises(NotRequestOwnerError):
            _request().edit(OWNER + 1, first_name="Grace")

    def test_cannot_edit_after_decision(self):
        approved = _request().approve(ADMIN, EXPIRY)
        with pytest.raises(InvalidRequestTransitionError):
            approved.edit(OWNER, first_name="Grace")

    def test_cannot_edit_request_awaiting_payment(self):
        with pytest.raises(InvalidRequestTransitionError):
            _request(plan_id=uuid.uuid4()).edit(OWNER, reason="changed")


class TestDecisions:
    """Tests for admin decisions."""

    def test_approve(self):
        approved = _request().approve(ADMIN, EXPIRY, "looks good")
        assert approved.status == RequestStatus.APPROVED
        assert approved.approved_by == ADMIN
        assert approved.approved_at is not None
        assert approved.admin_notes == "looks good"

    def test_approve_requires_expiry(self):
        with pytest.raises(MissingExpiryDateError):
            _request().approve(ADMIN, None)

    def test_second_approval_fails(self):
        approved = _request().approve(ADMIN, EXPIRY)
        with pytest.raises(InvalidRequestTransitionError):
            approved.approve(ADMIN, EXPIRY)

    def test_state_checked_before_expiry(self):
        approved = _request().approve(ADMIN, EXPIRY)
        with pytest.raises(InvalidRequestTransitionError):
            approved.approve(ADMIN, None)

    def test_reject(self):
        rejected = _request().reject(ADMIN, "duplicate")
        assert rejected.status == RequestStatus.REJECTED
        assert rejected.rejected_by == ADMIN
        assert rejected.approved_by is None

    def test_approve_only_pending(self):
        with pytest.raises(InvalidRequestTransitionError):
            _request(plan_id=uuid.uuid4()).approve(ADMIN, EXPIRY)

    def test_exempt_request_awaiting_payment(self):
        exempted = _request(plan_id=uuid.uuid4()).exempt(ADMIN, EXPIRY)
        assert exempted.status == RequestStatus.APPROVED

    def test_exempt_rejects_plain_pending(self):
        with pytest.raises(InvalidRequestTransitionError):
            _request().exempt(ADMIN, EXPIRY)

    @pytest.mark.parametrize("action", ["approve", "reject", "exempt"])
    def test_parse_action(self, action):
        assert DecisionAction.parse(action).value == action

    def test_parse_unknown_action(self):
        with pytest.raises(InvalidDecisionActionError):
            DecisionAction.parse("maybe")


class TestPaymentTransitions:
    """Tests for payment-driven transitions."""

    def test_attach_payment_reopens_rejected_request(self):
        plan_id = uuid.uuid4()
        rejected = _request(plan_id=plan_id).reject_payment(ADMIN, "unreadable")
        payment_id = uuid.uuid4()

        reopened = rejected.attach_payment(payment_id)

        assert reopened.status == RequestStatus.PENDING_PAYMENT
        assert reopened.payment_id == payment_id
        assert reopened.subscription_plan_id == plan_id
        assert reopened.rejected_by is None

    def test_attach_payment_replaces_plan(self):
        new_plan = uuid.uuid4()
        linked = _request().attach_payment(uuid.uuid4(), subscription_plan_id=new_plan)
        assert linked.subscription_plan_id == new_plan
        assert linked.status == RequestStatus.PENDING_PAYMENT

    def test_attach_payment_refused_after_approval(self):
        approved = _request().approve(ADMIN, EXPIRY)
        with pytest.raises(InvalidRequestTransitionError):
            approved.attach_payment(uuid.uuid4())

    def test_verified_then_approved(self):
        request = _request(plan_id=uuid.uuid4()).mark_payment_verified()
        assert request.status == RequestStatus.PAYMENT_VERIFIED

        approved = request.approve_after_payment(ADMIN)
        assert approved.status == RequestStatus.APPROVED
        assert approved.approved_by == ADMIN

    def test_approve_after_payment_requires_verification(self):
        with pytest.raises(InvalidRequestTransitionError):
            _request(plan_id=uuid.uuid4()).approve_after_payment(ADMIN)

    def test_reject_payment_records_reason(self):
        rejected = _request(plan_id=uuid.uuid4()).reject_payment(ADMIN, "wrong amount")
        assert rejected.status == RequestStatus.REJECTED
        assert rejected.admin_notes == "wrong amount"

    def test_reject_payment_not_awaiting_payment(self):
        with pytest.raises(InvalidRequestTransitionError):
            _request().reject_payment(ADMIN, "wrong amount")
