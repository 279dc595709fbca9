"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from core.domain.events import DomainEvent
from core.domain.value_objects import utcnow


class LicenseIssued(DomainEvent):
    """Event raised when a license is issued."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_key: str,
        full_name: str,
        account_ids: Iterable[str],
        expires_at: datetime,
        source: str,
        issued_by: Optional[int] = None,
        request_id: Optional[uuid.UUID] = None,
        recipient_user_id: Optional[int] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseIssued event.

        Args:
            license_id: License UUID
            license_key: Generated key
            full_name: Licensee name
            account_ids: Covered account IDs
            expires_at: Expiry datetime
            source: approve, exempt, payment or admin
            issued_by: Admin user id
            request_id: Originating request, if any
            recipient_user_id: User to notify, if any
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(license_id),
            event_type="LicenseIssued",
        )
        self.license_id = license_id
        self.license_key = license_key
        self.full_name = full_name
        self.account_ids = list(account_ids)
        self.expires_at = expires_at
        self.source = source
        self.issued_by = issued_by
        self.request_id = request_id
        self.recipient_user_id = recipient_user_id

    def payload(self) -> Dict[str, Any]:
        return {
            "license_id": str(self.license_id),
            "license_key": self.license_key,
            "full_name": self.full_name,
            "account_ids": self.account_ids,
            "expires_at": self.expires_at.isoformat(),
            "source": self.source,
            "actor_id": self.issued_by,
            "request_id": str(self.request_id) if self.request_id else None,
            "recipient_user_id": self.recipient_user_id,
        }


class LicenseUpdated(DomainEvent):
    """Event raised when an admin changes a license."""

    def __init__(
        self,
        license_id: uuid.UUID,
        changed_fields: List[str],
        updated_by: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(license_id),
            event_type="LicenseUpdated",
        )
        self.license_id = license_id
        self.changed_fields = list(changed_fields)
        self.updated_by = updated_by

    def payload(self) -> Dict[str, Any]:
        return {
            "license_id": str(self.license_id),
            "changed_fields": self.changed_fields,
            "actor_id": self.updated_by,
        }


class LicenseDeleted(DomainEvent):
    """Event raised when a license is deleted."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_key: str,
        deleted_by: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(license_id),
            event_type="LicenseDeleted",
        )
        self.license_id = license_id
        self.license_key = license_key
        self.deleted_by = deleted_by

    def payload(self) -> Dict[str, Any]:
        return {
            "license_id": str(self.license_id),
            "license_key": self.license_key,
            "actor_id": self.deleted_by,
        }


class LicenseExpired(DomainEvent):
    """Event raised when the expiration sweep marks a license expired."""

    def __init__(
        self,
        license_id: uuid.UUID,
        expires_at: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(license_id),
            event_type="LicenseExpired",
        )
        self.license_id = license_id
        self.expires_at = expires_at

    def payload(self) -> Dict[str, Any]:
        return {
            "license_id": str(self.license_id),
            "expires_at": self.expires_at.isoformat(),
        }
