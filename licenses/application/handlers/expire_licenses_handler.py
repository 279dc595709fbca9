"""
Expiration sweep handler.
"""
import logging
from typing import List

from core.domain.value_objects import utcnow
from core.infrastructure.events import event_bus
from core.metrics import licenses_expired_total
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseExpired
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExpireLicensesHandler:
    """Handler for ExpireLicensesCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: ExpireLicensesCommand) -> List[License]:
        """
        Mark overdue active licenses as expired.

        Args:
            command: ExpireLicensesCommand

        Returns:
            Licenses that are (or, in dry-run mode, would be) expired
        """
        now = command.current_time or utcnow()
        overdue = await self.license_repository.find_expired_active(now)
        if command.dry_run:
            return overdue

        expired = []
        for license in overdue:
            saved = await self.license_repository.save(license.mark_expired())
            expired.append(saved)
            licenses_expired_total.inc()
            logger.info("Marked license %s as expired", saved.id)
            await LicenseCacheService.invalidate_accounts(saved.account_ids)
            await event_bus.publish(LicenseExpired(license_id=saved.id, expires_at=saved.expires_at))
        return expired
