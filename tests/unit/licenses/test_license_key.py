"""
Unit tests for license key generation.
"""

import pytest

from licenses.domain.license_key import (
    KEY_ALPHABET,
    LICENSE_KEY_PATTERN,
    generate_license_key,
    is_valid_license_key,
)


def test_generated_key_format():
    for _ in range(50):
        key = generate_license_key()
        assert LICENSE_KEY_PATTERN.match(key)
        groups = key.split("-")
        assert len(groups) == 4
        assert all(len(group) == 4 for group in groups)
        assert all(char in KEY_ALPHABET for char in "".join(groups))


def test_generated_keys_differ():
    keys = {generate_license_key() for _ in range(10_000)}
    assert len(keys) == 10_000


@pytest.mark.parametrize(
    "key",
    ["abcd-EFGH-1234-5678", "ABCD-EFGH-1234", "ABCDEFGH12345678", "ABCD_EFGH_1234_5678", None],
)
def test_invalid_key_formats(key):
    assert is_valid_license_key(key) is False
