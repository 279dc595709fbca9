"""
Account validation handler.

Read-only lookup used by the MT5 Expert Advisor. Safe to call
without credentials: it never writes to the database.
"""
import logging

from core.domain.exceptions import AccountNotLicensedError
from core.domain.value_objects import AccountId, utcnow
from core.metrics import account_validations_total
from licenses.application.dto.license_dto import AccountValidationDTO
from licenses.application.queries.validate_account import ValidateAccountQuery
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.services import AccountValidationPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateAccountHandler:
    """Handler for ValidateAccountQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ValidateAccountQuery) -> AccountValidationDTO:
        """
        Validate an account ID.

        Args:
            query: ValidateAccountQuery

        Returns:
            AccountValidationDTO for the license answering the account

        Raises:
            InvalidAccountIdError: If the account ID is not numeric
            AccountNotLicensedError: If no license covers the account
        """
        account_id = AccountId.parse(query.account_id).value

        licenses = await LicenseCacheService.get_account_licenses(account_id)
        if licenses is None:
            licenses = await self.license_repository.find_by_account_id(account_id)
            await LicenseCacheService.set_account_licenses(account_id, licenses)

        now = utcnow()
        license = AccountValidationPolicy.select(licenses, now)
        if license is None:
            account_validations_total.labels(result="not_found").inc()
            logger.info("Account not licensed", extra={"account_id": account_id})
            raise AccountNotLicensedError()

        validation = AccountValidationPolicy.evaluate(license, now)
        account_validations_total.labels(
            result="active" if validation.is_active else "inactive"
        ).inc()
        return AccountValidationDTO.from_validation(validation)
