"""
License administration handlers.

Handlers for reading, listing, updating and deleting issued licenses.
All of them require admin capability.
"""
import logging

from core.application.pagination import Page, PageRequest
from core.domain.exceptions import AdminRequiredError, LicenseNotFoundError, ValidationError
from core.domain.value_objects import LicenseStatus
from core.infrastructure.events import event_bus
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseDeleted, LicenseUpdated
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "account_ids", "expires_at", "status", "metadata")


def parse_license_status(value):
    """Map a status string to LicenseStatus; None passes through."""
    if value is None or value == "":
        return None
    try:
        return LicenseStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid license status: {value}") from exc


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        if not query.actor.is_admin:
            raise AdminRequiredError()
        license = await self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")
        return LicenseDTO.from_entity(license)


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> Page:
        """
        List licenses, newest first.

        Returns:
            Page of LicenseDTO
        """
        if not query.actor.is_admin:
            raise AdminRequiredError()
        page_request = PageRequest.build(query.page, query.limit)
        licenses, total = await self.license_repository.list(
            status=parse_license_status(query.status),
            search=(query.search or "").strip() or None,
            offset=page_request.offset,
            limit=page_request.limit,
        )
        return Page(
            items=[LicenseDTO.from_entity(lic) for lic in licenses],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Apply admin changes to a license.

        Raises:
            AdminRequiredError: If the caller is not an admin
            LicenseNotFoundError: If the license does not exist
            ValidationError: If a field is invalid
        """
        if not command.actor.is_admin:
            raise AdminRequiredError()
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        updated = license.update(
            first_name=command.first_name,
            last_name=command.last_name,
            account_ids=command.account_ids,
            expires_at=command.expires_at,
            status=parse_license_status(command.status),
            metadata=command.metadata,
        )
        saved = await self.license_repository.save(updated)

        # Old and new accounts both change their lookup result.
        await LicenseCacheService.invalidate_accounts(
            set(license.account_ids) | set(saved.account_ids)
        )
        changed = [name for name in UPDATABLE_FIELDS if getattr(command, name) is not None]
        logger.info(
            "License updated",
            extra={"license_id": str(saved.id), "fields": changed},
        )
        await event_bus.publish(
            LicenseUpdated(
                license_id=saved.id,
                changed_fields=changed,
                updated_by=command.actor.user_id,
            )
        )
        return LicenseDTO.from_entity(saved)


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        if not command.actor.is_admin:
            raise AdminRequiredError()
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        await self.license_repository.delete(license.id)
        await LicenseCacheService.invalidate_accounts(license.account_ids)
        logger.info("License deleted", extra={"license_id": str(license.id)})
        await event_bus.publish(
            LicenseDeleted(
                license_id=license.id,
                license_key=license.license_key,
                deleted_by=command.actor.user_id,
            )
        )
