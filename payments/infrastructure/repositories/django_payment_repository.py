"""
Django implementation of PaymentRepository port.
"""
import uuid
from typing import Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async

from core.domain.exceptions import ConcurrentUpdateError, PaymentNotFoundError
from core.domain.value_objects import PaymentStatus
from payments.domain.payment import Payment
from payments.infrastructure.models import Payment as PaymentModel
from payments.ports.payment_repository import PaymentRepository


class DjangoPaymentRepository(PaymentRepository):
    """
    Django ORM implementation of PaymentRepository.
    """

    def _to_domain(self, model: PaymentModel) -> Payment:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Payment model

        Returns:
            Payment domain entity
        """
        return Payment(
            id=model.id,
            user_id=model.user_id,
            subscription_plan_id=model.subscription_plan_id,
            payment_method_id=model.payment_method_id,
            amount=model.amount,
            currency=model.currency,
            status=PaymentStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            license_request_id=model.license_request_id,
            proof=model.proof,
            transaction_reference=model.transaction_reference,
            verified_by=model.verified_by_id,
            verified_at=model.verified_at,
            rejection_reason=model.rejection_reason,
        )

    def _insert(self, payment: Payment) -> Payment:
        model = PaymentModel.objects.create(
            id=payment.id,
            user_id=payment.user_id,
            license_request_id=payment.license_request_id,
            subscription_plan_id=payment.subscription_plan_id,
            payment_method_id=payment.payment_method_id,
            amount=payment.amount,
            currency=payment.currency,
            proof=payment.proof,
            transaction_reference=payment.transaction_reference,
            status=payment.status.value,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )
        return self._to_domain(model)

    def _update(self, payment: Payment, expected_statuses: Iterable[PaymentStatus]) -> Payment:
        """
        Write a payment only if its stored status is still one of expected_statuses.

        Raises:
            ConcurrentUpdateError: If the stored status changed
            PaymentNotFoundError: If the payment no longer exists
        """
        updated = PaymentModel.objects.filter(
            id=payment.id, status__in=[status.value for status in expected_statuses]
        ).update(
            status=payment.status.value,
            verified_by_id=payment.verified_by,
            verified_at=payment.verified_at,
            rejection_reason=payment.rejection_reason,
            updated_at=payment.updated_at,
        )
        if not updated:
            if PaymentModel.objects.filter(id=payment.id).exists():
                raise ConcurrentUpdateError("Payment has already been processed")
            raise PaymentNotFoundError()
        return self._to_domain(PaymentModel.objects.get(id=payment.id))

    @sync_to_async
    def find_by_id(self, payment_id: uuid.UUID) -> Optional[Payment]:
        """
        Find payment by ID.

        Args:
            payment_id: Payment UUID

        Returns:
            Payment entity or None if not found
        """
        try:
            return self._to_domain(PaymentModel.objects.get(id=payment_id))
        except PaymentModel.DoesNotExist:
            return None

    @sync_to_async
    def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        license_request_id: Optional[uuid.UUID] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Payment], int]:
        queryset = PaymentModel.objects.all()
        if user_id is not None:
            queryset = queryset.filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status.value)
        if license_request_id:
            queryset = queryset.filter(license_request_id=license_request_id)
        total = queryset.count()
        page = queryset.order_by("-created_at")[offset : offset + limit]
        return [self._to_domain(model) for model in page], total
