"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.domain.value_objects import utcnow
from licenses.domain.license import License
from licenses.domain.services import AccountValidation


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    first_name: str
    last_name: str
    full_name: str
    account_ids: List[str]
    expires_at: datetime
    status: str
    is_active: bool
    is_expired: bool
    days_remaining: int
    request_id: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, license: License, current_time: Optional[datetime] = None) -> "LicenseDTO":
        now = current_time or utcnow()
        return cls(
            id=license.id,
            license_key=license.license_key,
            first_name=license.first_name,
            last_name=license.last_name,
            full_name=license.full_name,
            account_ids=list(license.account_ids),
            expires_at=license.expires_at,
            status=license.status.value,
            is_active=license.is_active(now),
            is_expired=license.is_expired(now),
            days_remaining=license.days_remaining(now),
            request_id=license.request_id,
            created_at=license.created_at,
            updated_at=license.updated_at,
            metadata=dict(license.metadata),
        )


@dataclass
class AccountValidationDTO:
    """DTO for the MT5 account validation response."""

    license_key: str
    first_name: str
    last_name: str
    full_name: str
    expiry_date: datetime
    is_active: bool
    is_expired: bool
    status: str
    days_remaining: int
    account_ids: List[str]

    @classmethod
    def from_validation(cls, validation: AccountValidation) -> "AccountValidationDTO":
        license = validation.license
        return cls(
            license_key=license.license_key,
            first_name=license.first_name,
            last_name=license.last_name,
            full_name=license.full_name,
            expiry_date=license.expires_at,
            is_active=validation.is_active,
            is_expired=validation.is_expired,
            status=license.status.value,
            days_remaining=validation.days_remaining,
            account_ids=list(license.account_ids),
        )
