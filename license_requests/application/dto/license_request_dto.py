"""
License request DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from license_requests.domain.license_request import LicenseRequest
from licenses.application.dto.license_dto import LicenseDTO


@dataclass
class LicenseRequestDTO:
    """DTO for license request information."""

    id: uuid.UUID
    user_id: int
    first_name: str
    last_name: str
    account_ids: List[str]
    reason: str
    status: str
    subscription_plan_id: Optional[uuid.UUID]
    payment_id: Optional[uuid.UUID]
    admin_notes: str
    approved_by: Optional[int]
    approved_at: Optional[datetime]
    rejected_by: Optional[int]
    rejected_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, request: LicenseRequest) -> "LicenseRequestDTO":
        return cls(
            id=request.id,
            user_id=request.user_id,
            first_name=request.first_name,
            last_name=request.last_name,
            account_ids=list(request.account_ids),
            reason=request.reason,
            status=request.status.value,
            subscription_plan_id=request.subscription_plan_id,
            payment_id=request.payment_id,
            admin_notes=request.admin_notes,
            approved_by=request.approved_by,
            approved_at=request.approved_at,
            rejected_by=request.rejected_by,
            rejected_at=request.rejected_at,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


@dataclass
class RequestDecisionDTO:
    """Outcome of an admin decision: the request and the license it issued, if any."""

    request: LicenseRequestDTO
    license: Optional[LicenseDTO] = None
