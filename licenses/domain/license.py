"""
License domain entity.

A license binds a set of account IDs to an expiry date. It is issued once
per approval and can be adjusted by an admin afterwards.
"""
import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from core.domain.exceptions import InvalidLicenseKeyError, ValidationError
from core.domain.value_objects import LicenseStatus, normalize_account_ids, utcnow
from licenses.domain.license_key import generate_license_key, is_valid_license_key

NAME_MAX_LENGTH = 100


def clean_name(value: Optional[str], label: str) -> str:
    """Trim a person name and check it is present and not too long."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValidationError(f"{label} must be at most {NAME_MAX_LENGTH} characters")
    return cleaned


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Immutable; every change returns a new instance.
    """

    id: uuid.UUID
    license_key: str
    first_name: str
    last_name: str
    account_ids: Tuple[str, ...]
    expires_at: datetime
    status: LicenseStatus
    created_at: datetime
    updated_at: datetime
    request_id: Optional[uuid.UUID] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate license entity."""
        if not is_valid_license_key(self.license_key):
            raise InvalidLicenseKeyError(f"Invalid license key: {self.license_key!r}")
        if not self.account_ids:
            raise ValidationError("A license must cover at least one account")
        if self.expires_at is None:
            raise ValidationError("License expiry date is required")

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        account_ids,
        expires_at: datetime,
        metadata: Optional[Dict[str, Any]] = None,
        request_id: Optional[uuid.UUID] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new active License with a freshly generated key.

        Args:
            first_name: Licensee first name
            last_name: Licensee last name
            account_ids: Account IDs covered by the license
            expires_at: Expiry datetime
            metadata: Free-form metadata (originating request, approver)
            request_id: Originating license request, if any
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = utcnow()
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=generate_license_key(),
            first_name=clean_name(first_name, "First name"),
            last_name=clean_name(last_name, "Last name"),
            account_ids=normalize_account_ids(account_ids),
            expires_at=expires_at,
            status=LicenseStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            request_id=request_id,
            metadata=dict(metadata or {}),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """True once the expiry date has passed."""
        return (current_time or utcnow()) > self.expires_at

    def is_active(self, current_time: Optional[datetime] = None) -> bool:
        """True if the license is in force: status active and not expired."""
        return self.status == LicenseStatus.ACTIVE and not self.is_expired(current_time)

    def days_remaining(self, current_time: Optional[datetime] = None) -> int:
        """Whole days left until expiry, rounded up; 0 once expired."""
        now = current_time or utcnow()
        if now > self.expires_at:
            return 0
        return math.ceil((self.expires_at - now) / timedelta(days=1))

    def with_new_key(self) -> "License":
        """Return a copy carrying a different generated key."""
        return replace(self, license_key=generate_license_key())

    def update(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        account_ids=None,
        expires_at: Optional[datetime] = None,
        status: Optional[LicenseStatus] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "License":
        """
        Return a copy with the given fields changed.

        Fields left as None keep their current value.
        """
        return replace(
            self,
            first_name=clean_name(first_name, "First name") if first_name is not None else self.first_name,
            last_name=clean_name(last_name, "Last name") if last_name is not None else self.last_name,
            account_ids=(
                normalize_account_ids(account_ids) if account_ids is not None else self.account_ids
            ),
            expires_at=expires_at if expires_at is not None else self.expires_at,
            status=status if status is not None else self.status,
            metadata=dict(metadata) if metadata is not None else self.metadata,
            updated_at=utcnow(),
        )

    def mark_expired(self) -> "License":
        """Return a copy with status expired."""
        return replace(self, status=LicenseStatus.EXPIRED, updated_at=utcnow())
