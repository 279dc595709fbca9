"""
Integration tests for Portal API endpoints.
"""

import uuid

import pytest
from django.urls import reverse


@pytest.mark.django_db
@pytest.mark.integration
class TestPortalAPI:
    """Integration tests for the end-user portal API."""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse("portal:requests"))

        assert response.status_code in (401, 403)

    def test_list_plans_and_methods(self, user_client, db_plan, db_method):
        plans = user_client.get(reverse("portal:list-plans"))
        methods = user_client.get(reverse("portal:list-payment-methods"))

        assert plans.status_code == 200
        assert plans.json()[0]["name"] == "Monthly"
        assert plans.json()[0]["price"] == "49.00"
        assert methods.status_code == 200
        assert methods.json()[0]["details"] == {"handle": "pay@example.com"}

    def test_create_request(self, user_client, db_plan):
        response = user_client.post(
            reverse("portal:requests"),
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "account_ids": ["123456"],
                "reason": "Copy trading",
                "subscription_plan_id": str(db_plan.id),
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending_payment"
        assert data["account_ids"] == ["123456"]

    def test_second_open_request_conflicts(self, user_client, pending_request):
        response = user_client.post(
            reverse("portal:requests"),
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "account_ids": ["1"],
                "reason": "Again",
            },
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "OPEN_REQUEST_EXISTS"

    def test_invalid_account_id(self, user_client):
        response = user_client.post(
            reverse("portal:requests"),
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "account_ids": ["12ab"],
                "reason": "Copy trading",
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ACCOUNT_ID"

    def test_missing_fields(self, user_client):
        response = user_client.post(reverse("portal:requests"), {}, format="json")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "first_name" in error["details"]

    def test_list_only_own_requests(self, user_client, pending_request):
        response = user_client.get(reverse("portal:requests"))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["pages"] == 1
        assert data["results"][0]["id"] == str(pending_request.id)

    def test_other_users_request_is_forbidden(self, api_client, other_user, pending_request):
        api_client.force_authenticate(user=other_user)

        response = api_client.get(
            reverse("portal:request-detail", kwargs={"request_id": pending_request.id})
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_unknown_request(self, user_client):
        response = user_client.get(
            reverse("portal:request-detail", kwargs={"request_id": uuid.uuid4()})
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_REQUEST_NOT_FOUND"

    def test_edit_request(self, user_client, pending_request):
        response = user_client.patch(
            reverse("portal:request-detail", kwargs={"request_id": pending_request.id}),
            {"reason": "Updated reason"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["reason"] == "Updated reason"
        assert response.json()["account_ids"] == ["1001", "1002"]

    def test_submit_payment_and_list(self, user_client, payment_request, db_plan, db_method):
        response = user_client.post(
            reverse("portal:submit-payment", kwargs={"request_id": payment_request.id}),
            {
                "subscription_plan_id": str(db_plan.id),
                "payment_method_id": str(db_method.id),
                "amount": "49.00",
                "proof": "Receipt 42",
                "transaction_reference": "TX-42",
            },
            format="json",
        )

        assert response.status_code == 201
        payment = response.json()
        assert payment["status"] == "pending"
        assert payment["currency"] == "USD"

        listed = user_client.get(reverse("portal:payments")).json()
        assert listed["total"] == 1
        detail = user_client.get(
            reverse("portal:payment-detail", kwargs={"payment_id": payment["id"]})
        )
        assert detail.json()["transaction_reference"] == "TX-42"

    def test_submit_payment_rejects_bad_amount(
        self, user_client, payment_request, db_plan, db_method
    ):
        response = user_client.post(
            reverse("portal:submit-payment", kwargs={"request_id": payment_request.id}),
            {
                "subscription_plan_id": str(db_plan.id),
                "payment_method_id": str(db_method.id),
                "amount": "-5.00",
                "proof": "Receipt",
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAYMENT_AMOUNT"
