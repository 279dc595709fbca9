"""
Access to the LICENSING settings dict with defaults.
"""
from django.conf import settings

DEFAULTS = {
    "DEFAULT_CURRENCY": "USD",
    "ACCOUNT_VALIDATION_CACHE_TTL": 60,
    "MT5_RATE_LIMIT_PER_MINUTE": 120,
    "TRUSTED_PROXY_COUNT": 0,
    "NOTIFICATIONS_ENABLED": True,
    "DEFAULT_PAYMENT_REJECTION_REASON": "Payment verification failed",
    "PORTAL_NAME": "Licensing Portal",
    "PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 100,
}


def licensing_setting(name: str):
    """Return settings.LICENSING[name], falling back to the default."""
    overrides = getattr(settings, "LICENSING", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
