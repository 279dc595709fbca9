"""
License request domain events.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from core.domain.events import DomainEvent
from core.domain.value_objects import utcnow


class LicenseRequestCreated(DomainEvent):
    """Event raised when a user submits a license request."""

    def __init__(
        self,
        request_id: uuid.UUID,
        user_id: int,
        account_ids: Iterable[str],
        status: str,
        subscription_plan_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseRequestCreated event.

        Args:
            request_id: Request UUID
            user_id: Requester
            account_ids: Requested account IDs
            status: Initial status (pending or pending_payment)
            subscription_plan_id: Selected plan, if any
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(request_id),
            event_type="LicenseRequestCreated",
        )
        self.request_id = request_id
        self.user_id = user_id
        self.account_ids = list(account_ids)
        self.status = status
        self.subscription_plan_id = subscription_plan_id

    def payload(self) -> Dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "actor_id": self.user_id,
            "account_ids": self.account_ids,
            "status": self.status,
            "subscription_plan_id": (
                str(self.subscription_plan_id) if self.subscription_plan_id else None
            ),
        }


class LicenseRequestEdited(DomainEvent):
    """Event raised when the owner edits a pending request."""

    def __init__(
        self,
        request_id: uuid.UUID,
        user_id: int,
        changed_fields: List[str],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(request_id),
            event_type="LicenseRequestEdited",
        )
        self.request_id = request_id
        self.user_id = user_id
        self.changed_fields = list(changed_fields)

    def payload(self) -> Dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "actor_id": self.user_id,
            "changed_fields": self.changed_fields,
        }


class LicenseRequestApproved(DomainEvent):
    """Event raised when a request is approved and its license issued."""

    def __init__(
        self,
        request_id: uuid.UUID,
        approved_by: int,
        action: str,
        license_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseRequestApproved event.

        Args:
            request_id: Request UUID
            approved_by: Admin user id
            action: approve, exempt or payment
            license_id: Issued license
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(request_id),
            event_type="LicenseRequestApproved",
        )
        self.request_id = request_id
        self.approved_by = approved_by
        self.action = action
        self.license_id = license_id

    def payload(self) -> Dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "actor_id": self.approved_by,
            "action": self.action,
            "license_id": str(self.license_id) if self.license_id else None,
        }


class LicenseRequestRejected(DomainEvent):
    """Event raised when a request is rejected."""

    def __init__(
        self,
        request_id: uuid.UUID,
        rejected_by: int,
        notes: str = "",
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(request_id),
            event_type="LicenseRequestRejected",
        )
        self.request_id = request_id
        self.rejected_by = rejected_by
        self.notes = notes

    def payload(self) -> Dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "actor_id": self.rejected_by,
            "notes": self.notes,
        }


class LicenseRequestDeleted(DomainEvent):
    """Event raised when an admin deletes a request."""

    def __init__(
        self,
        request_id: uuid.UUID,
        deleted_by: int,
        status: str,
        revoked_license_ids: Iterable[uuid.UUID] = (),
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utcnow(),
            aggregate_id=str(request_id),
            event_type="LicenseRequestDeleted",
        )
        self.request_id = request_id
        self.deleted_by = deleted_by
        self.status = status
        self.revoked_license_ids = list(revoked_license_ids)

    def payload(self) -> Dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "actor_id": self.deleted_by,
            "status": self.status,
            "revoked_license_ids": [str(license_id) for license_id in self.revoked_license_ids],
        }
