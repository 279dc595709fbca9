"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.cache import cache

from catalog.domain.payment_method import PaymentMethod
from catalog.domain.subscription_plan import SubscriptionPlan
from catalog.infrastructure.repositories.django_payment_method_repository import (
    DjangoPaymentMethodRepository,
)
from catalog.infrastructure.repositories.django_subscription_plan_repository import (
    DjangoSubscriptionPlanRepository,
)
from core.domain.value_objects import Actor, utcnow
from license_requests.domain.license_request import LicenseRequest
from license_requests.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from license_requests.infrastructure.unit_of_work import DjangoLifecycleUnitOfWork
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from payments.infrastructure.repositories.django_payment_repository import DjangoPaymentRepository


@pytest.fixture(autouse=True)
def clear_cache():
    """Every test starts with an empty cache (account lookups, rate limits)."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def plan_repository():
    """Fixture for SubscriptionPlanRepository."""
    return DjangoSubscriptionPlanRepository()


@pytest.fixture
def method_repository():
    """Fixture for PaymentMethodRepository."""
    return DjangoPaymentMethodRepository()


@pytest.fixture
def request_repository():
    """Fixture for LicenseRequestRepository."""
    return DjangoLicenseRequestRepository()


@pytest.fixture
def payment_repository():
    """Fixture for PaymentRepository."""
    return DjangoPaymentRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def unit_of_work(request_repository, payment_repository, license_repository):
    """Fixture for the lifecycle unit of work."""
    return DjangoLifecycleUnitOfWork(request_repository, payment_repository, license_repository)


@pytest.fixture
def user(db):
    """A regular portal user."""
    return get_user_model().objects.create_user(
        username="trader", email="trader@example.com", password="secret-pass-1"
    )


@pytest.fixture
def other_user(db):
    """A second portal user."""
    return get_user_model().objects.create_user(
        username="other", email="other@example.com", password="secret-pass-2"
    )


@pytest.fixture
def admin_user(db):
    """A staff user."""
    return get_user_model().objects.create_user(
        username="admin", email="admin@example.com", password="secret-pass-3", is_staff=True
    )


@pytest.fixture
def user_actor(user):
    return Actor(user_id=user.pk)


@pytest.fixture
def other_actor(other_user):
    return Actor(user_id=other_user.pk)


@pytest.fixture
def admin_actor(admin_user):
    return Actor(user_id=admin_user.pk, is_admin=True)


@pytest.fixture
def expiry():
    """An expiry date a year from now."""
    return utcnow() + timedelta(days=365)


@pytest.fixture
def db_plan(db, plan_repository):
    """An active subscription plan saved in database."""
    plan = SubscriptionPlan.create(
        name="Monthly", duration_months=1, price=Decimal("49.00"), currency="USD"
    )
    return async_to_sync(plan_repository.save)(plan)


@pytest.fixture
def db_method(db, method_repository):
    """An active payment method saved in database."""
    method = PaymentMethod.create(
        name="PayPal",
        method_type="paypal",
        details={"handle": "pay@example.com"},
        instructions="Send the amount as friends and family.",
    )
    return async_to_sync(method_repository.save)(method)


@pytest.fixture
def pending_request(user, request_repository):
    """A pending (payment-exempt) request owned by user."""
    request = LicenseRequest.create(
        user_id=user.pk,
        first_name="Ada",
        last_name="Lovelace",
        account_ids=["1001", "1002"],
        reason="Trading my two live accounts",
    )
    return async_to_sync(request_repository.add)(request)


@pytest.fixture
def payment_request(user, db_plan, request_repository):
    """A pending_payment request owned by user."""
    request = LicenseRequest.create(
        user_id=user.pk,
        first_name="Ada",
        last_name="Lovelace",
        account_ids=["2001"],
        reason="Monthly plan",
        subscription_plan_id=db_plan.id,
    )
    return async_to_sync(request_repository.add)(request)


@pytest.fixture
def db_license(db, license_repository):
    """An active license covering account 5001 saved in database."""
    license = License.create(
        first_name="Grace",
        last_name="Hopper",
        account_ids=["5001"],
        expires_at=utcnow() + timedelta(days=10),
    )
    return async_to_sync(license_repository.add)(license)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def user_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
