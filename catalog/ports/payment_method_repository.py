"""
PaymentMethod repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from catalog.domain.payment_method import PaymentMethod


class PaymentMethodRepository(ABC):
    """Abstract repository for PaymentMethod entities."""

    @abstractmethod
    async def save(self, method: PaymentMethod) -> PaymentMethod:
        """Insert or update a payment method."""
        pass

    @abstractmethod
    async def find_by_id(self, method_id: uuid.UUID) -> Optional[PaymentMethod]:
        """
        Find a payment method by ID.

        Returns:
            PaymentMethod or None if not found
        """
        pass

    @abstractmethod
    async def list(self, active_only: bool = True) -> List[PaymentMethod]:
        """
        List payment methods sorted by name.

        Args:
            active_only: Skip inactive methods
        """
        pass
