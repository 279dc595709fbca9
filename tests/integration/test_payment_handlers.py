"""
Integration tests for payment handlers.
"""

import uuid
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import (
    AdminRequiredError,
    InactiveCatalogEntryError,
    InvalidPaymentAmountError,
    InvalidPaymentTransitionError,
    NotRequestOwnerError,
    PaymentMethodNotFoundError,
    PaymentNotFoundError,
)
from catalog.domain.subscription_plan import SubscriptionPlan
from payments.application.commands.decide_payment import DecidePaymentCommand
from payments.application.commands.submit_payment import SubmitPaymentCommand
from payments.application.handlers.decide_payment_handler import DecidePaymentHandler
from payments.application.handlers.payment_query_handlers import (
    GetPaymentHandler,
    ListPaymentsHandler,
)
from payments.application.handlers.submit_payment_handler import SubmitPaymentHandler
from payments.application.queries.get_payment import GetPaymentQuery
from payments.application.queries.list_payments import ListPaymentsQuery


@pytest.fixture
def submit_handler(request_repository, plan_repository, method_repository, unit_of_work):
    return SubmitPaymentHandler(
        request_repository, plan_repository, method_repository, unit_of_work
    )


@pytest.fixture
def decide_handler(payment_repository, request_repository, unit_of_work):
    return DecidePaymentHandler(payment_repository, request_repository, unit_of_work)


def submit(handler, actor, request, plan, method, **overrides):
    fields = {
        "actor": actor,
        "request_id": request.id,
        "subscription_plan_id": plan.id,
        "payment_method_id": method.id,
        "amount": Decimal("49.00"),
        "proof": "PayPal receipt 7HX12",
    }
    fields.update(overrides)
    return async_to_sync(handler.handle)(SubmitPaymentCommand(**fields))


@pytest.mark.django_db
class TestSubmitPayment:
    """Tests for SubmitPaymentHandler."""

    def test_submit_links_payment(
        self, submit_handler, request_repository, user_actor, payment_request, db_plan, db_method
    ):
        dto = submit(submit_handler, user_actor, payment_request, db_plan, db_method)

        assert dto.status == "pending"
        assert dto.currency == "USD"
        assert dto.amount == Decimal("49.00")
        assert dto.license_request_id == payment_request.id
        request = async_to_sync(request_repository.find_by_id)(payment_request.id)
        assert request.payment_id == dto.id
        assert request.status.value == "pending_payment"

    def test_explicit_currency_is_upper_cased(
        self, submit_handler, user_actor, payment_request, db_plan, db_method
    ):
        dto = submit(
            submit_handler, user_actor, payment_request, db_plan, db_method, currency="eur"
        )

        assert dto.currency == "EUR"

    def test_only_owner_can_pay(
        self, submit_handler, other_actor, payment_request, db_plan, db_method
    ):
        with pytest.raises(NotRequestOwnerError):
            submit(submit_handler, other_actor, payment_request, db_plan, db_method)

    def test_non_positive_amount(
        self, submit_handler, user_actor, payment_request, db_plan, db_method
    ):
        with pytest.raises(InvalidPaymentAmountError):
            submit(
                submit_handler, user_actor, payment_request, db_plan, db_method, amount=Decimal("0")
            )

    def test_unknown_method(self, submit_handler, user_actor, payment_request, db_plan, db_method):
        with pytest.raises(PaymentMethodNotFoundError):
            submit(
                submit_handler,
                user_actor,
                payment_request,
                db_plan,
                db_method,
                payment_method_id=uuid.uuid4(),
            )

    def test_inactive_plan(
        self, submit_handler, plan_repository, user_actor, payment_request, db_method
    ):
        retired = async_to_sync(plan_repository.save)(
            SubscriptionPlan.create(
                name="Legacy", duration_months=12, price="99", currency="USD", is_active=False
            )
        )

        with pytest.raises(InactiveCatalogEntryError):
            submit(submit_handler, user_actor, payment_request, retired, db_method)

    def test_resubmission_reopens_rejected_request(
        self,
        submit_handler,
        decide_handler,
        request_repository,
        user_actor,
        admin_actor,
        payment_request,
        db_plan,
        db_method,
    ):
        first = submit(submit_handler, user_actor, payment_request, db_plan, db_method)
        async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(actor=admin_actor, payment_id=first.id, action="reject")
        )

        second = submit(submit_handler, user_actor, payment_request, db_plan, db_method)

        request = async_to_sync(request_repository.find_by_id)(payment_request.id)
        assert request.status.value == "pending_payment"
        assert request.payment_id == second.id
        assert request.rejected_by is None


@pytest.mark.django_db
class TestDecidePayment:
    """Tests for DecidePaymentHandler."""

    @pytest.fixture
    def payment(self, submit_handler, user_actor, payment_request, db_plan, db_method):
        return submit(submit_handler, user_actor, payment_request, db_plan, db_method)

    def test_verify_without_expiry(self, decide_handler, admin_actor, payment, mailoutbox):
        result = async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(actor=admin_actor, payment_id=payment.id, action="verify")
        )

        assert result.payment.status == "verified"
        assert result.payment.verified_by == admin_actor.user_id
        assert result.request.status == "payment_verified"
        assert result.license is None
        assert len(mailoutbox) == 1
        assert "payment verified" in mailoutbox[0].subject

    def test_verify_with_expiry_issues_license(
        self, decide_handler, license_repository, admin_actor, payment, expiry, mailoutbox
    ):
        result = async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(
                actor=admin_actor, payment_id=payment.id, action="verify", expires_at=expiry
            )
        )

        assert result.request.status == "approved"
        assert result.license.account_ids == ["2001"]
        assert result.license.metadata["payment_id"] == str(payment.id)
        licenses = async_to_sync(license_repository.find_by_account_id)("2001")
        assert [lic.id for lic in licenses] == [result.license.id]
        assert len(mailoutbox) == 2

    def test_verify_again_with_expiry(
        self, decide_handler, admin_actor, payment, expiry
    ):
        async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(actor=admin_actor, payment_id=payment.id, action="verify")
        )

        result = async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(
                actor=admin_actor, payment_id=payment.id, action="verify", expires_at=expiry
            )
        )

        assert result.request.status == "approved"
        assert result.license is not None

    def test_reject_uses_default_reason(
        self, decide_handler, admin_actor, payment, mailoutbox
    ):
        result = async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(actor=admin_actor, payment_id=payment.id, action="reject")
        )

        assert result.payment.status == "rejected"
        assert result.payment.rejection_reason == "Payment verification failed"
        assert result.payment.verified_by is None
        assert result.request.status == "rejected"
        assert result.request.admin_notes == "Payment verification failed"
        assert len(mailoutbox) == 1
        assert "Payment verification failed" in mailoutbox[0].body

    def test_rejected_payment_cannot_be_verified(self, decide_handler, admin_actor, payment):
        async_to_sync(decide_handler.handle)(
            DecidePaymentCommand(
                actor=admin_actor, payment_id=payment.id, action="reject", reason="Wrong amount"
            )
        )

        with pytest.raises(InvalidPaymentTransitionError):
            async_to_sync(decide_handler.handle)(
                DecidePaymentCommand(actor=admin_actor, payment_id=payment.id, action="verify")
            )

    def test_non_admin_forbidden(self, decide_handler, user_actor, payment):
        with pytest.raises(AdminRequiredError):
            async_to_sync(decide_handler.handle)(
                DecidePaymentCommand(actor=user_actor, payment_id=payment.id, action="verify")
            )

    def test_unknown_payment(self, decide_handler, admin_actor):
        with pytest.raises(PaymentNotFoundError):
            async_to_sync(decide_handler.handle)(
                DecidePaymentCommand(actor=admin_actor, payment_id=uuid.uuid4(), action="verify")
            )


@pytest.mark.django_db
class TestPaymentQueries:
    """Tests for payment read handlers."""

    def test_payer_and_admin_can_read(
        self,
        submit_handler,
        payment_repository,
        user_actor,
        other_actor,
        admin_actor,
        payment_request,
        db_plan,
        db_method,
    ):
        payment = submit(submit_handler, user_actor, payment_request, db_plan, db_method)
        handler = GetPaymentHandler(payment_repository)

        assert async_to_sync(handler.handle)(
            GetPaymentQuery(actor=user_actor, payment_id=payment.id)
        ).id == payment.id
        assert async_to_sync(handler.handle)(
            GetPaymentQuery(actor=admin_actor, payment_id=payment.id)
        ).id == payment.id
        with pytest.raises(NotRequestOwnerError):
            async_to_sync(handler.handle)(GetPaymentQuery(actor=other_actor, payment_id=payment.id))

    def test_list_scoping_and_filters(
        self,
        submit_handler,
        payment_repository,
        user_actor,
        other_actor,
        admin_actor,
        payment_request,
        db_plan,
        db_method,
    ):
        submit(submit_handler, user_actor, payment_request, db_plan, db_method)
        handler = ListPaymentsHandler(payment_repository)

        assert async_to_sync(handler.handle)(ListPaymentsQuery(actor=user_actor)).total == 1
        assert async_to_sync(handler.handle)(ListPaymentsQuery(actor=other_actor)).total == 0
        by_request = async_to_sync(handler.handle)(
            ListPaymentsQuery(actor=admin_actor, request_id=payment_request.id, status="pending")
        )
        assert by_request.total == 1
        verified = async_to_sync(handler.handle)(
            ListPaymentsQuery(actor=admin_actor, status="verified")
        )
        assert verified.total == 0
