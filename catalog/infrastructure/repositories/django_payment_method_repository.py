"""
Django implementation of PaymentMethodRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from catalog.domain.payment_method import PaymentMethod, details_to_dict, parse_details
from catalog.infrastructure.models import PaymentMethod as PaymentMethodModel
from catalog.ports.payment_method_repository import PaymentMethodRepository
from core.domain.value_objects import PaymentMethodType


class DjangoPaymentMethodRepository(PaymentMethodRepository):
    """Django ORM implementation of PaymentMethodRepository."""

    def _to_domain(self, model: PaymentMethodModel) -> PaymentMethod:
        method_type = PaymentMethodType(model.method_type)
        return PaymentMethod(
            id=model.id,
            name=model.name,
            method_type=method_type,
            details=parse_details(method_type, model.details),
            instructions=model.instructions,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, method: PaymentMethod) -> PaymentMethod:
        model, _ = PaymentMethodModel.objects.update_or_create(
            id=method.id,
            defaults={
                "name": method.name,
                "method_type": method.method_type.value,
                "details": details_to_dict(method.details),
                "instructions": method.instructions,
                "is_active": method.is_active,
                "updated_at": method.updated_at,
            },
            create_defaults={
                "name": method.name,
                "method_type": method.method_type.value,
                "details": details_to_dict(method.details),
                "instructions": method.instructions,
                "is_active": method.is_active,
                "created_at": method.created_at,
                "updated_at": method.updated_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, method_id: uuid.UUID) -> Optional[PaymentMethod]:
        try:
            return self._to_domain(PaymentMethodModel.objects.get(id=method_id))
        except PaymentMethodModel.DoesNotExist:
            return None

    @sync_to_async
    def list(self, active_only: bool = True) -> List[PaymentMethod]:
        queryset = PaymentMethodModel.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return [self._to_domain(m) for m in queryset.order_by("name")]
