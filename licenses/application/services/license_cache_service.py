"""
License cache service.

Caches the licenses covering an account ID for the MT5 validation
endpoint. Only the stored license fields are cached; activity flags are
recomputed on every read.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from core.conf import licensing_setting
from core.domain.value_objects import LicenseStatus
from core.infrastructure.cache_adapters import cache_adapter
from licenses.domain.license import License

logger = logging.getLogger(__name__)


class LicenseCacheService:
    """Service for caching account lookups."""

    @staticmethod
    def _account_key(account_id: str) -> str:
        """Generate cache key for an account lookup."""
        return f"license:account:{account_id}"

    @staticmethod
    def _to_snapshot(license: License) -> Dict[str, Any]:
        return {
            "id": str(license.id),
            "license_key": license.license_key,
            "first_name": license.first_name,
            "last_name": license.last_name,
            "account_ids": list(license.account_ids),
            "expires_at": license.expires_at.isoformat(),
            "status": license.status.value,
            "created_at": license.created_at.isoformat(),
            "updated_at": license.updated_at.isoformat(),
            "request_id": str(license.request_id) if license.request_id else None,
            "metadata": license.metadata,
        }

    @staticmethod
    def _from_snapshot(data: Dict[str, Any]) -> License:
        return License(
            id=uuid.UUID(data["id"]),
            license_key=data["license_key"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            account_ids=tuple(data["account_ids"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            status=LicenseStatus(data["status"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
            request_id=uuid.UUID(data["request_id"]) if data.get("request_id") else None,
            metadata=data.get("metadata") or {},
        )

    @staticmethod
    async def get_account_licenses(account_id: str) -> Optional[List[License]]:
        """
        Get cached licenses for an account.

        Args:
            account_id: Account ID

        Returns:
            Cached licenses, or None on a cache miss
        """
        cached = await cache_adapter.get(LicenseCacheService._account_key(account_id))
        if cached is None:
            return None
        try:
            return [LicenseCacheService._from_snapshot(item) for item in cached]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Error deserializing cached licenses: %s", e)
            return None

    @staticmethod
    async def set_account_licenses(
        account_id: str, licenses: Iterable[License], ttl: Optional[int] = None
    ) -> None:
        """
        Cache the licenses covering an account.

        Args:
            account_id: Account ID
            licenses: Licenses to cache (may be empty)
            ttl: Time to live in seconds
        """
        await cache_adapter.set(
            LicenseCacheService._account_key(account_id),
            [LicenseCacheService._to_snapshot(lic) for lic in licenses],
            timeout=ttl or licensing_setting("ACCOUNT_VALIDATION_CACHE_TTL"),
        )

    @staticmethod
    async def invalidate_accounts(account_ids: Iterable[str]) -> None:
        """
        Drop cached lookups for the given accounts.

        Args:
            account_ids: Account IDs whose licenses changed
        """
        keys = [LicenseCacheService._account_key(a) for a in set(account_ids)]
        await cache_adapter.delete_many(keys)
        logger.debug("Invalidated account cache", extra={"accounts": len(keys)})
