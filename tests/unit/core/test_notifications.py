"""
Unit tests for notification messages.
"""

from core.infrastructure.event_handlers import entity_type_for
from core.infrastructure.notifications import (
    MESSAGE_BUILDERS,
    license_issued_message,
    payment_rejected_message,
    payment_verified_message,
)


def test_license_issued_message_contains_key_and_accounts(settings):
    settings.LICENSING = {"PORTAL_NAME": "EA Portal"}
    subject, body = license_issued_message(
        {
            "full_name": "Ada Lovelace",
            "license_key": "ABCD-EFGH-1234-5678",
            "expires_at": "2027-01-01T00:00:00+00:00",
            "account_ids": ["1001", "1002"],
        }
    )

    assert subject == "EA Portal: your license is ready"
    assert "Hello Ada Lovelace," in body
    assert "ABCD-EFGH-1234-5678" in body
    assert "1001, 1002" in body


def test_payment_verified_message_mentions_pending_review_without_license():
    _, body = payment_verified_message({"amount": "49.00", "currency": "USD"})
    assert "49.00 USD" in body
    assert "once an administrator completes the review" in body

    _, body = payment_verified_message(
        {"amount": "49.00", "currency": "USD", "license_id": "abc"}
    )
    assert "once an administrator completes the review" not in body


def test_payment_rejected_message_includes_reason():
    subject, body = payment_rejected_message({"reason": "Amount does not match"})
    assert subject.endswith("payment rejected")
    assert "Reason: Amount does not match" in body


def test_only_user_facing_events_have_messages():
    assert set(MESSAGE_BUILDERS) == {"LicenseIssued", "PaymentVerified", "PaymentRejected"}


def test_entity_type_for_prefers_longest_prefix():
    assert entity_type_for("LicenseRequestApproved") == "license_request"
    assert entity_type_for("LicenseIssued") == "license"
    assert entity_type_for("PaymentRejected") == "payment"
    assert entity_type_for("SomethingElse") == "event"
