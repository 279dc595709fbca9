"""
Payment repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import uuid

from core.domain.value_objects import PaymentStatus
from payments.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Abstract repository for Payment entities.

    Inserts and status changes go through LifecycleUnitOfWork so they stay
    atomic with the linked request.
    """

    @abstractmethod
    async def find_by_id(self, payment_id: uuid.UUID) -> Optional[Payment]:
        """
        Find payment by ID.

        Args:
            payment_id: Payment UUID

        Returns:
            Payment entity or None if not found
        """
        pass

    @abstractmethod
    async def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        license_request_id: Optional[uuid.UUID] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Payment], int]:
        """
        List payments newest first.

        Returns:
            (page of payments, total matching)
        """
        pass
