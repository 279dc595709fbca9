"""
License issuance service.

Builds license entities for every issuing path (admin issuance, request
approval, exemption, payment verification) and announces them once stored.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from core.infrastructure.events import event_bus
from core.metrics import licenses_issued_total
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License

logger = logging.getLogger(__name__)


class LicenseIssuanceService:
    """Shared steps around storing a new license."""

    @staticmethod
    def prepare(
        first_name: str,
        last_name: str,
        account_ids: Iterable[str],
        expires_at: datetime,
        issued_by: int,
        source: str,
        request_id: Optional[uuid.UUID] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> License:
        """
        Build an active license with a fresh key.

        Args:
            first_name: Licensee first name
            last_name: Licensee last name
            account_ids: Covered account IDs
            expires_at: Expiry datetime
            issued_by: Admin user id
            source: admin, approve, exempt or payment
            request_id: Originating request, if any
            metadata: Extra metadata to store

        Returns:
            License entity, not yet stored
        """
        data = dict(metadata or {})
        data.setdefault("issued_by", issued_by)
        data.setdefault("source", source)
        if request_id:
            data.setdefault("request_id", str(request_id))
        return License.create(
            first_name=first_name,
            last_name=last_name,
            account_ids=account_ids,
            expires_at=expires_at,
            metadata=data,
            request_id=request_id,
        )

    @staticmethod
    async def announce(
        license: License,
        source: str,
        issued_by: int,
        recipient_user_id: Optional[int] = None,
    ) -> None:
        """
        Run the post-commit steps for a stored license.

        Drops cached account lookups, counts the issuance and publishes
        LicenseIssued.
        """
        await LicenseCacheService.invalidate_accounts(license.account_ids)
        licenses_issued_total.labels(source=source).inc()
        logger.info(
            "License issued",
            extra={
                "license_id": str(license.id),
                "source": source,
                "admin_id": issued_by,
                "request_id": str(license.request_id) if license.request_id else None,
            },
        )
        await event_bus.publish(
            LicenseIssued(
                license_id=license.id,
                license_key=license.license_key,
                full_name=license.full_name,
                account_ids=license.account_ids,
                expires_at=license.expires_at,
                source=source,
                issued_by=issued_by,
                request_id=license.request_id,
                recipient_user_id=recipient_user_id,
            )
        )
