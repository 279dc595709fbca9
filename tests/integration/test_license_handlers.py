"""
Integration tests for license handlers, the expiration sweep and the
check_license_expirations management command.
"""

import uuid
from datetime import timedelta
from io import StringIO

import pytest
from asgiref.sync import async_to_sync
from django.core.management import call_command

from core.domain.exceptions import (
    AccountNotLicensedError,
    AdminRequiredError,
    InvalidAccountIdError,
    LicenseNotFoundError,
    ValidationError,
)
from core.domain.value_objects import LicenseStatus, utcnow
from core.tasks import expire_licenses_task
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    DeleteLicenseHandler,
    GetLicenseHandler,
    ListLicensesHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.validate_account_handler import ValidateAccountHandler
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_account import ValidateAccountQuery
from licenses.domain.license import License


def store(license_repository, **fields):
    defaults = {
        "first_name": "Alan",
        "last_name": "Turing",
        "account_ids": ["6001"],
        "expires_at": utcnow() + timedelta(days=30),
    }
    defaults.update(fields)
    return async_to_sync(license_repository.add)(License.create(**defaults))


def status_of(license_repository, license):
    return async_to_sync(license_repository.find_by_id)(license.id).status


@pytest.mark.django_db
class TestValidateAccount:
    """Tests for ValidateAccountHandler."""

    def test_active_license(self, license_repository, db_license):
        handler = ValidateAccountHandler(license_repository)

        result = async_to_sync(handler.handle)(ValidateAccountQuery(account_id=5001))

        assert result.license_key == db_license.license_key
        assert result.full_name == "Grace Hopper"
        assert result.is_active is True
        assert result.is_expired is False
        assert result.status == "active"
        assert result.days_remaining == 10
        assert result.account_ids == ["5001"]

    def test_unknown_account(self, license_repository, db):
        handler = ValidateAccountHandler(license_repository)

        with pytest.raises(AccountNotLicensedError):
            async_to_sync(handler.handle)(ValidateAccountQuery(account_id="99999"))

    def test_invalid_account(self, license_repository, db):
        handler = ValidateAccountHandler(license_repository)

        with pytest.raises(InvalidAccountIdError):
            async_to_sync(handler.handle)(ValidateAccountQuery(account_id="12-34"))

    def test_expired_license_is_reported_inactive(self, license_repository, db):
        store(license_repository, account_ids=["7007"], expires_at=utcnow() - timedelta(days=2))
        handler = ValidateAccountHandler(license_repository)

        result = async_to_sync(handler.handle)(ValidateAccountQuery(account_id="7007"))

        assert result.is_active is False
        assert result.is_expired is True
        assert result.days_remaining == 0

    def test_active_license_wins_over_newer_inactive(self, license_repository, db):
        active = store(license_repository, account_ids=["8008"])
        newer = store(license_repository, account_ids=["8008"])
        async_to_sync(license_repository.save)(newer.update(status=LicenseStatus.INACTIVE))
        handler = ValidateAccountHandler(license_repository)

        result = async_to_sync(handler.handle)(ValidateAccountQuery(account_id="8008"))

        assert result.license_key == active.license_key

    def test_lookup_is_cached_until_license_changes(
        self, license_repository, admin_actor, db_license
    ):
        handler = ValidateAccountHandler(license_repository)
        async_to_sync(handler.handle)(ValidateAccountQuery(account_id="5001"))

        # Written behind the handlers' back: the cached result is served.
        async_to_sync(license_repository.save)(db_license.update(status=LicenseStatus.INACTIVE))
        cached = async_to_sync(handler.handle)(ValidateAccountQuery(account_id="5001"))
        assert cached.is_active is True

        async_to_sync(UpdateLicenseHandler(license_repository).handle)(
            UpdateLicenseCommand(actor=admin_actor, license_id=db_license.id, status="inactive")
        )
        fresh = async_to_sync(handler.handle)(ValidateAccountQuery(account_id="5001"))
        assert fresh.is_active is False
        assert fresh.status == "inactive"


@pytest.mark.django_db
class TestLicenseAdministration:
    """Tests for admin license handlers."""

    def test_issue(self, license_repository, admin_actor, expiry):
        handler = IssueLicenseHandler(license_repository)

        dto = async_to_sync(handler.handle)(
            IssueLicenseCommand(
                actor=admin_actor,
                first_name="Alan",
                last_name="Turing",
                account_ids=["9001", "9002"],
                expires_at=expiry,
                metadata={"note": "partner"},
            )
        )

        assert dto.status == "active"
        assert dto.account_ids == ["9001", "9002"]
        assert dto.metadata["note"] == "partner"
        assert dto.metadata["source"] == "admin"
        assert dto.request_id is None

    def test_issue_requires_admin(self, license_repository, user_actor, expiry):
        handler = IssueLicenseHandler(license_repository)

        with pytest.raises(AdminRequiredError):
            async_to_sync(handler.handle)(
                IssueLicenseCommand(
                    actor=user_actor,
                    first_name="Alan",
                    last_name="Turing",
                    account_ids=["9001"],
                    expires_at=expiry,
                )
            )

    def test_update(self, license_repository, admin_actor, db_license, expiry):
        handler = UpdateLicenseHandler(license_repository)

        dto = async_to_sync(handler.handle)(
            UpdateLicenseCommand(
                actor=admin_actor,
                license_id=db_license.id,
                account_ids=["5001", "5003"],
                expires_at=expiry,
            )
        )

        assert dto.account_ids == ["5001", "5003"]
        assert dto.expires_at == expiry
        assert dto.license_key == db_license.license_key

    def test_update_rejects_unknown_status(self, license_repository, admin_actor, db_license):
        handler = UpdateLicenseHandler(license_repository)

        with pytest.raises(ValidationError):
            async_to_sync(handler.handle)(
                UpdateLicenseCommand(actor=admin_actor, license_id=db_license.id, status="paused")
            )

    def test_get_and_list(self, license_repository, admin_actor, user_actor, db_license):
        get_handler = GetLicenseHandler(license_repository)
        list_handler = ListLicensesHandler(license_repository)

        assert async_to_sync(get_handler.handle)(
            GetLicenseQuery(actor=admin_actor, license_id=db_license.id)
        ).id == db_license.id
        page = async_to_sync(list_handler.handle)(
            ListLicensesQuery(actor=admin_actor, search="Grace")
        )
        assert page.total == 1
        with pytest.raises(AdminRequiredError):
            async_to_sync(list_handler.handle)(ListLicensesQuery(actor=user_actor))

    def test_delete(self, license_repository, admin_actor, db_license):
        handler = DeleteLicenseHandler(license_repository)

        async_to_sync(handler.handle)(
            DeleteLicenseCommand(actor=admin_actor, license_id=db_license.id)
        )

        assert async_to_sync(license_repository.find_by_id)(db_license.id) is None
        with pytest.raises(LicenseNotFoundError):
            async_to_sync(handler.handle)(
                DeleteLicenseCommand(actor=admin_actor, license_id=db_license.id)
            )

    def test_get_unknown(self, license_repository, admin_actor, db):
        with pytest.raises(LicenseNotFoundError):
            async_to_sync(GetLicenseHandler(license_repository).handle)(
                GetLicenseQuery(actor=admin_actor, license_id=uuid.uuid4())
            )


@pytest.mark.django_db
class TestExpireLicenses:
    """Tests for the expiration sweep."""

    @pytest.fixture
    def overdue(self, license_repository):
        return store(
            license_repository, account_ids=["4004"], expires_at=utcnow() - timedelta(hours=1)
        )

    def test_dry_run_changes_nothing(self, license_repository, overdue, db_license):
        handler = ExpireLicensesHandler(license_repository)

        found = async_to_sync(handler.handle)(ExpireLicensesCommand(dry_run=True))

        assert [lic.id for lic in found] == [overdue.id]
        assert status_of(license_repository, overdue) == LicenseStatus.ACTIVE

    def test_marks_overdue_expired(self, license_repository, overdue, db_license):
        handler = ExpireLicensesHandler(license_repository)

        expired = async_to_sync(handler.handle)(ExpireLicensesCommand())

        assert [lic.id for lic in expired] == [overdue.id]
        assert status_of(license_repository, overdue) == LicenseStatus.EXPIRED
        assert status_of(license_repository, db_license) == LicenseStatus.ACTIVE

    def test_current_time_override(self, license_repository, db_license):
        handler = ExpireLicensesHandler(license_repository)

        found = async_to_sync(handler.handle)(
            ExpireLicensesCommand(dry_run=True, current_time=utcnow() + timedelta(days=11))
        )

        assert [lic.id for lic in found] == [db_license.id]

    def test_management_command(self, license_repository, overdue):
        out = StringIO()
        call_command("check_license_expirations", "--dry-run", stdout=out)
        assert "Found 1 expired license(s)" in out.getvalue()

        out = StringIO()
        call_command("check_license_expirations", stdout=out)
        assert "Successfully marked 1 license(s) as expired" in out.getvalue()

        out = StringIO()
        call_command("check_license_expirations", stdout=out)
        assert "No expired licenses to update" in out.getvalue()

    def test_celery_task(self, license_repository, overdue):
        assert expire_licenses_task.delay().get() == 1
        assert status_of(license_repository, overdue) == LicenseStatus.EXPIRED
