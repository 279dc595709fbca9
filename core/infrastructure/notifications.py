"""
Plain-text notification messages sent to portal users.
"""
from typing import Any, Dict, Tuple

from core.conf import licensing_setting


def _format_accounts(account_ids) -> str:
    return ", ".join(str(a) for a in account_ids or [])


def license_issued_message(data: Dict[str, Any]) -> Tuple[str, str]:
    """Subject and body for a newly issued license."""
    portal = licensing_setting("PORTAL_NAME")
    name = data.get("full_name") or "there"
    body = "\n".join(
        [
            f"Hello {name},",
            "",
            "Your license request has been approved.",
            "",
            f"License key: {data.get('license_key')}",
            f"Expires: {data.get('expires_at')}",
            f"Accounts: {_format_accounts(data.get('account_ids'))}",
            "",
            "Enter the license key in the Expert Advisor settings to activate it.",
            "",
            f"- {portal}",
        ]
    )
    return f"{portal}: your license is ready", body


def payment_verified_message(data: Dict[str, Any]) -> Tuple[str, str]:
    """Subject and body for a verified payment."""
    portal = licensing_setting("PORTAL_NAME")
    lines = [
        "Hello,",
        "",
        f"Your payment of {data.get('amount')} {data.get('currency')} has been verified.",
    ]
    if not data.get("license_id"):
        lines.append("Your license will be issued once an administrator completes the review.")
    lines += ["", f"- {portal}"]
    return f"{portal}: payment verified", "\n".join(lines)


def payment_rejected_message(data: Dict[str, Any]) -> Tuple[str, str]:
    """Subject and body for a rejected payment."""
    portal = licensing_setting("PORTAL_NAME")
    body = "\n".join(
        [
            "Hello,",
            "",
            "We could not verify your payment.",
            f"Reason: {data.get('reason')}",
            "",
            "You can submit a new payment proof for the same request.",
            "",
            f"- {portal}",
        ]
    )
    return f"{portal}: payment rejected", body


MESSAGE_BUILDERS = {
    "LicenseIssued": license_issued_message,
    "PaymentVerified": payment_verified_message,
    "PaymentRejected": payment_rejected_message,
}
