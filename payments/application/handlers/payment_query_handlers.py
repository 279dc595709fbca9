"""
Payment read handlers.
"""
from core.application.pagination import Page, PageRequest
from core.domain.exceptions import NotRequestOwnerError, PaymentNotFoundError, ValidationError
from core.domain.value_objects import PaymentStatus
from payments.application.dto.payment_dto import PaymentDTO
from payments.application.queries.get_payment import GetPaymentQuery
from payments.application.queries.list_payments import ListPaymentsQuery
from payments.ports.payment_repository import PaymentRepository


def parse_payment_status(value):
    """Map a status string to PaymentStatus; None passes through."""
    if value is None or value == "":
        return None
    try:
        return PaymentStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid payment status: {value}") from exc


class GetPaymentHandler:
    """Handler for GetPaymentQuery."""

    def __init__(self, payment_repository: PaymentRepository):
        self.payment_repository = payment_repository

    async def handle(self, query: GetPaymentQuery) -> PaymentDTO:
        payment = await self.payment_repository.find_by_id(query.payment_id)
        if not payment:
            raise PaymentNotFoundError(f"Payment {query.payment_id} not found")
        if not (query.actor.is_admin or payment.user_id == query.actor.user_id):
            raise NotRequestOwnerError("You do not own this payment")
        return PaymentDTO.from_entity(payment)


class ListPaymentsHandler:
    """Handler for ListPaymentsQuery."""

    def __init__(self, payment_repository: PaymentRepository):
        self.payment_repository = payment_repository

    async def handle(self, query: ListPaymentsQuery) -> Page:
        page_request = PageRequest.build(query.page, query.limit)
        payments, total = await self.payment_repository.list(
            user_id=None if query.actor.is_admin else query.actor.user_id,
            status=parse_payment_status(query.status),
            license_request_id=query.request_id,
            offset=page_request.offset,
            limit=page_request.limit,
        )
        return Page(
            items=[PaymentDTO.from_entity(payment) for payment in payments],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )
