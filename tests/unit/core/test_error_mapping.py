"""
Unit tests for the error kind to HTTP status mapping.
"""

import pytest

from api.exceptions import status_for
from core.domain.exceptions import (
    AccountNotLicensedError,
    AdminRequiredError,
    ApprovedRequestDeletionError,
    ConcurrentUpdateError,
    DomainException,
    InvalidAccountIdError,
    InvalidRequestTransitionError,
    MissingExpiryDateError,
    NotRequestOwnerError,
    OpenLicenseRequestExistsError,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (InvalidAccountIdError(), 400),
        (MissingExpiryDateError(), 400),
        (AdminRequiredError(), 403),
        (NotRequestOwnerError(), 403),
        (AccountNotLicensedError(), 404),
        (OpenLicenseRequestExistsError(), 409),
        (InvalidRequestTransitionError(), 422),
        (ConcurrentUpdateError(), 422),
        (ApprovedRequestDeletionError(), 422),
    ],
)
def test_status_for_error_kind(exc, expected):
    assert status_for(exc) == expected


def test_unclassified_domain_exception_is_server_error():
    assert status_for(DomainException("boom")) == 500


def test_exception_codes():
    assert InvalidAccountIdError().code == "INVALID_ACCOUNT_ID"
    assert AccountNotLicensedError().message == "No license found for this account"
