"""
Integration tests for license request handlers.
"""

import uuid
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import (
    AdminRequiredError,
    ApprovedRequestDeletionError,
    InvalidDecisionActionError,
    InvalidRequestTransitionError,
    MissingExpiryDateError,
    NotRequestOwnerError,
    OpenLicenseRequestExistsError,
    SubscriptionPlanNotFoundError,
    ValidationError,
)
from core.domain.value_objects import PaymentStatus
from core.infrastructure.models import AuditLog
from license_requests.application.commands.create_license_request import (
    CreateLicenseRequestCommand,
)
from license_requests.application.commands.decide_license_request import (
    DecideLicenseRequestCommand,
)
from license_requests.application.commands.delete_license_request import (
    DeleteLicenseRequestCommand,
)
from license_requests.application.commands.edit_license_request import (
    EditLicenseRequestCommand,
)
from license_requests.application.handlers.create_license_request_handler import (
    CreateLicenseRequestHandler,
)
from license_requests.application.handlers.decide_license_request_handler import (
    DecideLicenseRequestHandler,
)
from license_requests.application.handlers.license_request_handlers import (
    DeleteLicenseRequestHandler,
    EditLicenseRequestHandler,
    GetLicenseRequestHandler,
    ListLicenseRequestsHandler,
)
from license_requests.application.queries.get_license_request import GetLicenseRequestQuery
from license_requests.application.queries.list_license_requests import (
    ListLicenseRequestsQuery,
)
from payments.application.commands.submit_payment import SubmitPaymentCommand
from payments.application.handlers.submit_payment_handler import SubmitPaymentHandler


@pytest.mark.django_db
class TestCreateLicenseRequest:
    """Tests for CreateLicenseRequestHandler."""

    def _create(self, request_repository, plan_repository, actor, **overrides):
        handler = CreateLicenseRequestHandler(request_repository, plan_repository)
        fields = {
            "actor": actor,
            "first_name": " Ada ",
            "last_name": "Lovelace",
            "reason": "Copy trading",
            "account_ids": ["123456", 654321],
            "subscription_plan_id": None,
        }
        fields.update(overrides)
        return async_to_sync(handler.handle)(CreateLicenseRequestCommand(**fields))

    def test_without_plan_is_pending(self, request_repository, plan_repository, user_actor):
        dto = self._create(request_repository, plan_repository, user_actor)

        assert dto.status == "pending"
        assert dto.first_name == "Ada"
        assert dto.account_ids == ["123456", "654321"]
        assert AuditLog.objects.filter(
            action="LicenseRequestCreated", entity_id=str(dto.id)
        ).exists()

    def test_with_plan_is_pending_payment(
        self, request_repository, plan_repository, user_actor, db_plan
    ):
        dto = self._create(
            request_repository, plan_repository, user_actor, subscription_plan_id=db_plan.id
        )

        assert dto.status == "pending_payment"
        assert dto.subscription_plan_id == db_plan.id

    def test_second_open_request_conflicts(
        self, request_repository, plan_repository, user_actor, pending_request
    ):
        with pytest.raises(OpenLicenseRequestExistsError):
            self._create(request_repository, plan_repository, user_actor)

    def test_unknown_plan(self, request_repository, plan_repository, user_actor):
        with pytest.raises(SubscriptionPlanNotFoundError):
            self._create(
                request_repository, plan_repository, user_actor, subscription_plan_id=uuid.uuid4()
            )

    def test_non_numeric_account_rejected(self, request_repository, plan_repository, user_actor):
        with pytest.raises(ValidationError):
            self._create(request_repository, plan_repository, user_actor, account_ids=["12a4"])


@pytest.mark.django_db
class TestEditLicenseRequest:
    """Tests for EditLicenseRequestHandler."""

    def test_owner_edits_pending_request(
        self, request_repository, unit_of_work, user_actor, pending_request
    ):
        handler = EditLicenseRequestHandler(request_repository, unit_of_work)

        dto = async_to_sync(handler.handle)(
            EditLicenseRequestCommand(
                actor=user_actor,
                request_id=pending_request.id,
                account_ids=["42"],
                reason="Only one account now",
            )
        )

        assert dto.account_ids == ["42"]
        assert dto.reason == "Only one account now"
        assert dto.first_name == "Ada"

    def test_other_user_cannot_edit(
        self, request_repository, unit_of_work, other_actor, pending_request
    ):
        handler = EditLicenseRequestHandler(request_repository, unit_of_work)

        with pytest.raises(NotRequestOwnerError):
            async_to_sync(handler.handle)(
                EditLicenseRequestCommand(
                    actor=other_actor, request_id=pending_request.id, reason="Mine now"
                )
            )

    def test_pending_payment_request_cannot_be_edited(
        self, request_repository, unit_of_work, user_actor, payment_request
    ):
        handler = EditLicenseRequestHandler(request_repository, unit_of_work)

        with pytest.raises(InvalidRequestTransitionError):
            async_to_sync(handler.handle)(
                EditLicenseRequestCommand(
                    actor=user_actor, request_id=payment_request.id, reason="Changed"
                )
            )


@pytest.mark.django_db
class TestDecideLicenseRequest:
    """Tests for DecideLicenseRequestHandler."""

    @pytest.fixture
    def handler(self, request_repository, unit_of_work):
        return DecideLicenseRequestHandler(request_repository, unit_of_work)

    def test_approve_issues_license(
        self, handler, license_repository, admin_actor, pending_request, expiry, mailoutbox
    ):
        result = async_to_sync(handler.handle)(
            DecideLicenseRequestCommand(
                actor=admin_actor,
                request_id=pending_request.id,
                action="approve",
                expires_at=expiry,
                admin_notes="Welcome aboard",
            )
        )

        assert result.request.status == "approved"
        assert result.request.approved_by == admin_actor.user_id
        assert result.request.admin_notes == "Welcome aboard"
        assert result.license.account_ids == ["1001", "1002"]
        assert result.license.full_name == "Ada Lovelace"
        assert result.license.metadata["source"] == "approve"

        stored = async_to_sync(license_repository.find_by_id)(result.license.id)
        assert stored.request_id == pending_request.id
        assert AuditLog.objects.filter(action="LicenseIssued").count() == 1
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["trader@example.com"]
        assert result.license.license_key in mailoutbox[0].body

    def test_reject(self, handler, admin_actor, pending_request):
        result = async_to_sync(handler.handle)(
            DecideLicenseRequestCommand(
                actor=admin_actor,
                request_id=pending_request.id,
                action="reject",
                admin_notes="Incomplete",
            )
        )

        assert result.request.status == "rejected"
        assert result.request.rejected_by == admin_actor.user_id
        assert result.license is None

    def test_exempt_payment_request(self, handler, admin_actor, payment_request, expiry):
        result = async_to_sync(handler.handle)(
            DecideLicenseRequestCommand(
                actor=admin_actor,
                request_id=payment_request.id,
                action="exempt",
                expires_at=expiry,
            )
        )

        assert result.request.status == "approved"
        assert result.license.metadata["source"] == "exempt"

    def test_exempt_leaves_submitted_payment_unchanged(
        self,
        handler,
        admin_actor,
        user_actor,
        payment_request,
        db_plan,
        db_method,
        request_repository,
        plan_repository,
        method_repository,
        payment_repository,
        unit_of_work,
        expiry,
    ):
        submit_handler = SubmitPaymentHandler(
            request_repository, plan_repository, method_repository, unit_of_work
        )
        submitted = async_to_sync(submit_handler.handle)(
            SubmitPaymentCommand(
                actor=user_actor,
                request_id=payment_request.id,
                subscription_plan_id=db_plan.id,
                payment_method_id=db_method.id,
                amount=Decimal("49.00"),
                proof="PayPal receipt 7HX12",
            )
        )
        before = async_to_sync(payment_repository.find_by_id)(submitted.id)

        result = async_to_sync(handler.handle)(
            DecideLicenseRequestCommand(
                actor=admin_actor,
                request_id=payment_request.id,
                action="exempt",
                expires_at=expiry,
            )
        )

        after = async_to_sync(payment_repository.find_by_id)(submitted.id)
        assert result.request.status == "approved"
        assert result.license is not None
        assert after.status == PaymentStatus.PENDING
        assert after.verified_by is None
        assert after.verified_at is None
        assert after.rejection_reason == ""
        assert after == before

    def test_approve_requires_pending(self, handler, admin_actor, payment_request, expiry):
        with pytest.raises(InvalidRequestTransitionError):
            async_to_sync(handler.handle)(
                DecideLicenseRequestCommand(
                    actor=admin_actor,
                    request_id=payment_request.id,
                    action="approve",
                    expires_at=expiry,
                )
            )

    def test_second_decision_fails_and_issues_one_license(
        self, handler, license_repository, admin_actor, pending_request, expiry
    ):
        command = DecideLicenseRequestCommand(
            actor=admin_actor,
            request_id=pending_request.id,
            action="approve",
            expires_at=expiry,
        )
        async_to_sync(handler.handle)(command)

        with pytest.raises(InvalidRequestTransitionError):
            async_to_sync(handler.handle)(command)
        assert len(async_to_sync(license_repository.find_by_account_id)("1001")) == 1

    def test_non_admin_forbidden(self, handler, user_actor, pending_request, expiry):
        with pytest.raises(AdminRequiredError):
            async_to_sync(handler.handle)(
                DecideLicenseRequestCommand(
                    actor=user_actor,
                    request_id=pending_request.id,
                    action="approve",
                    expires_at=expiry,
                )
            )

    def test_approve_without_expiry(self, handler, admin_actor, pending_request):
        with pytest.raises(MissingExpiryDateError):
            async_to_sync(handler.handle)(
                DecideLicenseRequestCommand(
                    actor=admin_actor, request_id=pending_request.id, action="approve"
                )
            )

    def test_unknown_action(self, handler, admin_actor, pending_request):
        with pytest.raises(InvalidDecisionActionError):
            async_to_sync(handler.handle)(
                DecideLicenseRequestCommand(
                    actor=admin_actor, request_id=pending_request.id, action="maybe"
                )
            )


@pytest.mark.django_db
class TestDeleteLicenseRequest:
    """Tests for DeleteLicenseRequestHandler."""

    def _approve(self, request_repository, unit_of_work, admin_actor, request_id, expiry):
        handler = DecideLicenseRequestHandler(request_repository, unit_of_work)
        return async_to_sync(handler.handle)(
            DecideLicenseRequestCommand(
                actor=admin_actor, request_id=request_id, action="approve", expires_at=expiry
            )
        )

    def test_delete_pending(self, request_repository, unit_of_work, admin_actor, pending_request):
        handler = DeleteLicenseRequestHandler(request_repository, unit_of_work)

        async_to_sync(handler.handle)(
            DeleteLicenseRequestCommand(actor=admin_actor, request_id=pending_request.id)
        )

        assert async_to_sync(request_repository.find_by_id)(pending_request.id) is None

    def test_approved_needs_revoke(
        self, request_repository, unit_of_work, admin_actor, pending_request, expiry
    ):
        self._approve(request_repository, unit_of_work, admin_actor, pending_request.id, expiry)
        handler = DeleteLicenseRequestHandler(request_repository, unit_of_work)

        with pytest.raises(ApprovedRequestDeletionError):
            async_to_sync(handler.handle)(
                DeleteLicenseRequestCommand(actor=admin_actor, request_id=pending_request.id)
            )

    def test_revoke_deletes_licenses(
        self,
        request_repository,
        license_repository,
        unit_of_work,
        admin_actor,
        pending_request,
        expiry,
    ):
        decision = self._approve(
            request_repository, unit_of_work, admin_actor, pending_request.id, expiry
        )
        handler = DeleteLicenseRequestHandler(request_repository, unit_of_work)

        async_to_sync(handler.handle)(
            DeleteLicenseRequestCommand(
                actor=admin_actor, request_id=pending_request.id, revoke_license=True
            )
        )

        assert async_to_sync(license_repository.find_by_id)(decision.license.id) is None
        assert async_to_sync(request_repository.find_by_id)(pending_request.id) is None

    def test_non_admin_forbidden(
        self, request_repository, unit_of_work, user_actor, pending_request
    ):
        handler = DeleteLicenseRequestHandler(request_repository, unit_of_work)

        with pytest.raises(AdminRequiredError):
            async_to_sync(handler.handle)(
                DeleteLicenseRequestCommand(actor=user_actor, request_id=pending_request.id)
            )


@pytest.mark.django_db
class TestLicenseRequestQueries:
    """Tests for request read handlers."""

    def test_owner_and_admin_can_read(
        self, request_repository, user_actor, admin_actor, other_actor, pending_request
    ):
        handler = GetLicenseRequestHandler(request_repository)

        for actor in (user_actor, admin_actor):
            dto = async_to_sync(handler.handle)(
                GetLicenseRequestQuery(actor=actor, request_id=pending_request.id)
            )
            assert dto.id == pending_request.id

        with pytest.raises(NotRequestOwnerError):
            async_to_sync(handler.handle)(
                GetLicenseRequestQuery(actor=other_actor, request_id=pending_request.id)
            )

    def test_list_is_scoped_to_user(
        self, request_repository, user_actor, other_actor, admin_actor, pending_request
    ):
        handler = ListLicenseRequestsHandler(request_repository)

        own = async_to_sync(handler.handle)(ListLicenseRequestsQuery(actor=user_actor))
        others = async_to_sync(handler.handle)(ListLicenseRequestsQuery(actor=other_actor))
        admin = async_to_sync(handler.handle)(
            ListLicenseRequestsQuery(actor=admin_actor, status="pending", search="lovelace")
        )

        assert own.total == 1
        assert others.total == 0
        assert admin.total == 1
        assert admin.items[0].id == pending_request.id

    def test_invalid_status_filter(self, request_repository, admin_actor):
        handler = ListLicenseRequestsHandler(request_repository)

        with pytest.raises(ValidationError):
            async_to_sync(handler.handle)(
                ListLicenseRequestsQuery(actor=admin_actor, status="archived")
            )
