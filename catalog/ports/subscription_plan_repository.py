"""
SubscriptionPlan repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from catalog.domain.subscription_plan import SubscriptionPlan


class SubscriptionPlanRepository(ABC):
    """Abstract repository for SubscriptionPlan entities."""

    @abstractmethod
    async def save(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        """
        Insert or update a plan.

        Raises:
            CatalogEntryExistsError: If another plan has the same name
        """
        pass

    @abstractmethod
    async def find_by_id(self, plan_id: uuid.UUID) -> Optional[SubscriptionPlan]:
        """
        Find a plan by ID.

        Returns:
            SubscriptionPlan or None if not found
        """
        pass

    @abstractmethod
    async def list(self, active_only: bool = True) -> List[SubscriptionPlan]:
        """
        List plans sorted by duration.

        Args:
            active_only: Skip inactive plans
        """
        pass
