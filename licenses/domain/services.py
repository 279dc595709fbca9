"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from licenses.domain.license import License


@dataclass(frozen=True)
class AccountValidation:
    """Activity flags of a license as seen by the MT5 client."""

    license: License
    is_active: bool
    is_expired: bool
    days_remaining: int


class AccountValidationPolicy:
    """Chooses and evaluates the license that answers an account lookup."""

    @staticmethod
    def select(licenses: Iterable[License], current_time: datetime) -> Optional[License]:
        """
        Pick the license that answers for an account.

        Licenses in force win over inactive or expired ones; among equals
        the most recently created wins.

        Args:
            licenses: Licenses covering the account
            current_time: Evaluation time

        Returns:
            The chosen license or None when there are none
        """
        candidates = list(licenses)
        if not candidates:
            return None
        return max(
            candidates,
            key=lambda lic: (lic.is_active(current_time), lic.created_at),
        )

    @staticmethod
    def evaluate(license: License, current_time: datetime) -> AccountValidation:
        """Compute the activity flags of a license at current_time."""
        return AccountValidation(
            license=license,
            is_active=license.is_active(current_time),
            is_expired=license.is_expired(current_time),
            days_remaining=license.days_remaining(current_time),
        )
