"""
License key generation and format checks.

Keys are four hyphen-separated groups of four characters over [A-Z0-9].
"""

import re
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4
LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}$")


def generate_license_key() -> str:
    """
    Generate a license key in format: XXXX-XXXX-XXXX-XXXX.

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)


def is_valid_license_key(key: str) -> bool:
    """Check that a string has the license key format."""
    return isinstance(key, str) and bool(LICENSE_KEY_PATTERN.match(key))
