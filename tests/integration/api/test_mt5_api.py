"""
Integration tests for MT5 Expert Advisor API endpoints.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse

from core.domain.value_objects import utcnow
from licenses.domain.license import License


@pytest.mark.django_db
@pytest.mark.integration
class TestMT5API:
    """Integration tests for MT5 account validation."""

    def test_validate_licensed_account(self, api_client, db_license):
        response = api_client.post(
            reverse("mt5:validate-account"), {"account_id": "5001"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        license = data["license"]
        assert license["licenseKey"] == db_license.license_key
        assert license["firstName"] == "Grace"
        assert license["lastName"] == "Hopper"
        assert license["fullName"] == "Grace Hopper"
        assert license["isActive"] is True
        assert license["isExpired"] is False
        assert license["status"] == "active"
        assert license["daysRemaining"] == 10
        assert license["accountIds"] == ["5001"]
        assert "expiryDate" in license

    def test_numeric_account_id_is_accepted(self, api_client, db_license):
        response = api_client.post(
            reverse("mt5:validate-account"), {"account_id": 5001}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["license"]["licenseKey"] == db_license.license_key

    def test_expired_license_reports_inactive(self, api_client, license_repository):
        async_to_sync(license_repository.add)(
            License.create(
                first_name="Alan",
                last_name="Turing",
                account_ids=["3003"],
                expires_at=utcnow() - timedelta(days=1),
            )
        )

        response = api_client.post(
            reverse("mt5:validate-account"), {"account_id": "3003"}, format="json"
        )

        assert response.status_code == 200
        license = response.json()["license"]
        assert license["isActive"] is False
        assert license["isExpired"] is True
        assert license["daysRemaining"] == 0

    def test_unlicensed_account(self, api_client):
        response = api_client.post(
            reverse("mt5:validate-account"), {"account_id": "424242"}, format="json"
        )

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["isActive"] is False
        assert data["error"]

    def test_missing_account_id(self, api_client):
        response = api_client.post(reverse("mt5:validate-account"), {}, format="json")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Account ID is required",
            "isActive": False,
        }

    def test_non_numeric_account_id(self, api_client):
        response = api_client.post(
            reverse("mt5:validate-account"), {"account_id": "abc"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["isActive"] is False

    def test_ping(self, api_client):
        response = api_client.get(reverse("mt5:ping"))

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "timestamp" in response.json()

    def test_rate_limit(self, api_client, settings):
        settings.LICENSING = {"MT5_RATE_LIMIT_PER_MINUTE": 2}

        statuses = [api_client.get(reverse("mt5:ping")).status_code for _ in range(3)]

        assert statuses == [200, 200, 429]
        blocked = api_client.get(reverse("mt5:ping"))
        assert blocked.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert blocked["X-RateLimit-Limit"] == "2"
        assert "Retry-After" in blocked

    def test_rate_limit_ignores_forwarded_for_without_trusted_proxy(self, api_client, settings):
        settings.LICENSING = {"MT5_RATE_LIMIT_PER_MINUTE": 2}

        statuses = [
            api_client.get(
                reverse("mt5:ping"), HTTP_X_FORWARDED_FOR=f"203.0.113.{n}"
            ).status_code
            for n in range(3)
        ]

        assert statuses == [200, 200, 429]

    def test_rate_limit_uses_hop_added_by_trusted_proxy(self, api_client, settings):
        settings.LICENSING = {"MT5_RATE_LIMIT_PER_MINUTE": 2, "TRUSTED_PROXY_COUNT": 1}
        ping = reverse("mt5:ping")

        spoofed = [
            api_client.get(
                ping, HTTP_X_FORWARDED_FOR=f"198.51.100.{n}, 203.0.113.7", REMOTE_ADDR="10.0.0.2"
            ).status_code
            for n in range(3)
        ]
        other_client = api_client.get(
            ping, HTTP_X_FORWARDED_FOR="203.0.113.8", REMOTE_ADDR="10.0.0.2"
        )

        assert spoofed == [200, 200, 429]
        assert other_client.status_code == 200
