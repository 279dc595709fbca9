"""
Unit tests for the account validation policy.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.services import AccountValidationPolicy


def _license(expires_in_days, created_days_ago=0, status=LicenseStatus.ACTIVE):
    now = datetime.now(timezone.utc)
    license = License.create(
        first_name="Ada",
        last_name="Lovelace",
        account_ids=["777"],
        expires_at=now + timedelta(days=expires_in_days),
    )
    return replace(license, status=status, created_at=now - timedelta(days=created_days_ago))


class TestAccountValidationPolicy:
    """Tests for AccountValidationPolicy."""

    def test_select_none_when_no_licenses(self):
        assert AccountValidationPolicy.select([], datetime.now(timezone.utc)) is None

    def test_active_license_wins_over_newer_expired(self):
        now = datetime.now(timezone.utc)
        active = _license(30, created_days_ago=60)
        expired = _license(-1, created_days_ago=1)

        assert AccountValidationPolicy.select([expired, active], now) == active

    def test_active_license_wins_over_newer_inactive(self):
        now = datetime.now(timezone.utc)
        active = _license(30, created_days_ago=60)
        inactive = _license(30, created_days_ago=1, status=LicenseStatus.INACTIVE)

        assert AccountValidationPolicy.select([inactive, active], now) == active

    def test_newest_wins_among_active(self):
        now = datetime.now(timezone.utc)
        older = _license(30, created_days_ago=10)
        newer = _license(30, created_days_ago=1)

        assert AccountValidationPolicy.select([older, newer], now) == newer

    def test_evaluate(self):
        now = datetime.now(timezone.utc)
        license = replace(_license(0), expires_at=now + timedelta(days=10))

        validation = AccountValidationPolicy.evaluate(license, now)

        assert validation.is_active is True
        assert validation.is_expired is False
        assert validation.days_remaining == 10
