"""
Unit tests for catalog entities.
"""

from decimal import Decimal

import pytest

from catalog.domain.payment_method import (
    AccountHandleDetails,
    BankTransferDetails,
    FreeformDetails,
    PaymentMethod,
    details_to_dict,
)
from catalog.domain.subscription_plan import SubscriptionPlan
from core.domain.exceptions import InvalidPaymentMethodDetailsError, ValidationError
from core.domain.value_objects import PaymentMethodType


class TestSubscriptionPlan:
    """Tests for SubscriptionPlan."""

    def test_create_normalizes_fields(self):
        plan = SubscriptionPlan.create(
            name=" Quarterly ", duration_months=3, price="120", currency="eur"
        )
        assert plan.name == "Quarterly"
        assert plan.price == Decimal("120")
        assert plan.currency == "EUR"
        assert plan.is_active is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "", "duration_months": 1, "price": "10", "currency": "USD"},
            {"name": "Plan", "duration_months": 0, "price": "10", "currency": "USD"},
            {"name": "Plan", "duration_months": 1, "price": "-1", "currency": "USD"},
            {"name": "Plan", "duration_months": 1, "price": "abc", "currency": "USD"},
        ],
    )
    def test_invalid_plans(self, kwargs):
        with pytest.raises(ValidationError):
            SubscriptionPlan.create(**kwargs)

    def test_update_ignores_none(self):
        plan = SubscriptionPlan.create(
            name="Monthly", duration_months=1, price="10", currency="USD"
        )
        updated = plan.update(price="12.50", is_active=False, name=None)
        assert updated.name == "Monthly"
        assert updated.price == Decimal("12.50")
        assert updated.is_active is False


class TestPaymentMethod:
    """Tests for PaymentMethod and its typed details."""

    def test_bank_transfer_details(self):
        method = PaymentMethod.create(
            name="Bank",
            method_type="bank_transfer",
            details={"bank_name": "BCR", "account_holder": "ACME", "account_number": "123"},
            instructions="Transfer and upload the receipt.",
        )
        assert isinstance(method.details, BankTransferDetails)
        assert details_to_dict(method.details) == {
            "bank_name": "BCR",
            "account_holder": "ACME",
            "account_number": "123",
        }

    def test_account_handle_details(self):
        method = PaymentMethod.create(
            name="Zelle",
            method_type=PaymentMethodType.ZELLE,
            details={"handle": "pay@example.com"},
            instructions="Send via Zelle.",
        )
        assert isinstance(method.details, AccountHandleDetails)

    def test_missing_required_detail(self):
        with pytest.raises(InvalidPaymentMethodDetailsError):
            PaymentMethod.create(
                name="Crypto",
                method_type="crypto",
                details={"asset": "USDT", "network": "TRC20"},
                instructions="Send USDT.",
            )

    def test_unknown_detail_field(self):
        with pytest.raises(InvalidPaymentMethodDetailsError):
            PaymentMethod.create(
                name="PayPal",
                method_type="paypal",
                details={"handle": "x", "iban": "y"},
                instructions="Send.",
            )

    def test_other_type_keeps_freeform_map(self):
        method = PaymentMethod.create(
            name="Cash",
            method_type="other",
            details={"office": "San Jose"},
            instructions="Pay at the office.",
        )
        assert method.details == FreeformDetails(fields={"office": "San Jose"})

    def test_instructions_required(self):
        with pytest.raises(ValidationError):
            PaymentMethod.create(
                name="PayPal", method_type="paypal", details={"handle": "x"}, instructions=" "
            )

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            PaymentMethod.create(
                name="Venmo", method_type="venmo", details={}, instructions="Send."
            )
