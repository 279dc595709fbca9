"""
Direct license issuance by an admin.
"""
from core.domain.exceptions import AdminRequiredError
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_issuance_service import LicenseIssuanceService
from licenses.ports.license_repository import LicenseRepository


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: IssueLicenseCommand) -> LicenseDTO:
        """
        Issue an active license.

        Args:
            command: IssueLicenseCommand

        Returns:
            LicenseDTO of the stored license

        Raises:
            AdminRequiredError: If the caller is not an admin
            ValidationError: If names or account IDs are invalid
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()

        license = LicenseIssuanceService.prepare(
            first_name=command.first_name,
            last_name=command.last_name,
            account_ids=command.account_ids,
            expires_at=command.expires_at,
            issued_by=command.actor.user_id,
            source="admin",
            metadata=command.metadata,
        )
        stored = await self.license_repository.add(license)
        await LicenseIssuanceService.announce(stored, source="admin", issued_by=command.actor.user_id)
        return LicenseDTO.from_entity(stored)
