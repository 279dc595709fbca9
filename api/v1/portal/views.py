"""
Portal API views.

These endpoints are used by signed-in portal users to:
- Browse subscription plans and payment methods
- Submit, edit and follow their license requests
- Submit proof of payment
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.common import actor_from, page_data, page_params, validation_failed
from api.v1.portal.serializers import (
    CreateLicenseRequestSerializer,
    EditLicenseRequestSerializer,
    SubmitPaymentSerializer,
)
from api.v1.serializers import (
    LicenseRequestSerializer,
    PaymentMethodSerializer,
    PaymentSerializer,
    SubscriptionPlanSerializer,
)
from catalog.application.handlers.catalog_handlers import (
    ListPaymentMethodsHandler,
    ListSubscriptionPlansHandler,
)
from catalog.application.queries.list_catalog import (
    ListPaymentMethodsQuery,
    ListSubscriptionPlansQuery,
)
from catalog.infrastructure.repositories.django_payment_method_repository import (
    DjangoPaymentMethodRepository,
)
from catalog.infrastructure.repositories.django_subscription_plan_repository import (
    DjangoSubscriptionPlanRepository,
)
from core.domain.value_objects import Actor
from core.instrumentation import Status, StatusCode, get_tracer
from license_requests.application.commands.create_license_request import (
    CreateLicenseRequestCommand,
)
from license_requests.application.commands.edit_license_request import (
    EditLicenseRequestCommand,
)
from license_requests.application.handlers.create_license_request_handler import (
    CreateLicenseRequestHandler,
)
from license_requests.application.handlers.license_request_handlers import (
    EditLicenseRequestHandler,
    GetLicenseRequestHandler,
    ListLicenseRequestsHandler,
)
from license_requests.application.queries.get_license_request import GetLicenseRequestQuery
from license_requests.application.queries.list_license_requests import (
    ListLicenseRequestsQuery,
)
from license_requests.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from license_requests.infrastructure.unit_of_work import DjangoLifecycleUnitOfWork
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from payments.application.commands.submit_payment import SubmitPaymentCommand
from payments.application.handlers.payment_query_handlers import (
    GetPaymentHandler,
    ListPaymentsHandler,
)
from payments.application.handlers.submit_payment_handler import SubmitPaymentHandler
from payments.application.queries.get_payment import GetPaymentQuery
from payments.application.queries.list_payments import ListPaymentsQuery
from payments.infrastructure.repositories.django_payment_repository import DjangoPaymentRepository

# Initialize repositories (in production, use DI container)
_plan_repo = DjangoSubscriptionPlanRepository()
_method_repo = DjangoPaymentMethodRepository()
_request_repo = DjangoLicenseRequestRepository()
_payment_repo = DjangoPaymentRepository()
_license_repo = DjangoLicenseRepository()
_unit_of_work = DjangoLifecycleUnitOfWork(_request_repo, _payment_repo, _license_repo)

tracer = get_tracer(__name__)


class SubscriptionPlanListView(APIView):
    """View for listing active subscription plans."""

    @extend_schema(
        operation_id="portal_list_plans",
        summary="List Subscription Plans",
        description="Active subscription plans, shortest duration first.",
        tags=["Portal API"],
        responses={200: SubscriptionPlanSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListSubscriptionPlansHandler(plan_repository=_plan_repo)
        plans = async_to_sync(handler.handle)(ListSubscriptionPlansQuery())
        return Response(SubscriptionPlanSerializer(plans, many=True).data)


class PaymentMethodListView(APIView):
    """View for listing active payment methods."""

    @extend_schema(
        operation_id="portal_list_payment_methods",
        summary="List Payment Methods",
        description="Active payment methods with their payment instructions.",
        tags=["Portal API"],
        responses={200: PaymentMethodSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListPaymentMethodsHandler(method_repository=_method_repo)
        methods = async_to_sync(handler.handle)(ListPaymentMethodsQuery())
        return Response(PaymentMethodSerializer(methods, many=True).data)


class LicenseRequestListCreateView(APIView):
    """View for listing and creating the caller's license requests."""

    @extend_schema(
        operation_id="portal_list_requests",
        summary="List My License Requests",
        tags=["Portal API"],
        parameters=[
            OpenApiParameter(name="status", type=str, required=False),
            OpenApiParameter(name="page", type=int, required=False),
            OpenApiParameter(name="limit", type=int, required=False),
        ],
        responses={200: LicenseRequestSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        # Portal listing is always scoped to the caller, admins included.
        actor = Actor(user_id=request.user.pk, is_admin=False)
        handler = ListLicenseRequestsHandler(request_repository=_request_repo)
        page = async_to_sync(handler.handle)(
            ListLicenseRequestsQuery(
                actor=actor,
                status=request.query_params.get("status"),
                **page_params(request),
            )
        )
        return Response(page_data(page, LicenseRequestSerializer))

    @extend_schema(
        operation_id="portal_create_request",
        summary="Create License Request",
        description=(
            "Request a license for one or more numeric account IDs. With a "
            "subscription plan the request waits for payment; without one it goes "
            "straight to admin review. Only one open request per user is allowed."
        ),
        tags=["Portal API"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseRequestSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Subscription plan not found"},
            409: {"description": "An open request already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create_request)(request, actor_from(request))

    async def _handle_create_request(self, request: Request, actor: Actor) -> Response:
        """Async handler for create license request."""
        with tracer.start_as_current_span("create_license_request") as span:
            span.set_attribute("operation", "create_license_request")
            span.set_attribute("user.id", actor.user_id)

            serializer = CreateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data

            handler = CreateLicenseRequestHandler(
                request_repository=_request_repo,
                plan_repository=_plan_repo,
            )
            result = await handler.handle(
                CreateLicenseRequestCommand(
                    actor=actor,
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    account_ids=data["account_ids"],
                    reason=data["reason"],
                    subscription_plan_id=data.get("subscription_plan_id"),
                )
            )

            span.set_attribute("request.id", str(result.id))
            span.set_attribute("request.status", result.status)
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseRequestSerializer(result).data, status=status.HTTP_201_CREATED
            )


class LicenseRequestDetailView(APIView):
    """View for reading and editing one of the caller's requests."""

    @extend_schema(
        operation_id="portal_get_request",
        summary="Get License Request",
        tags=["Portal API"],
        responses={
            200: LicenseRequestSerializer,
            403: {"description": "Not the owner"},
            404: {"description": "License request not found"},
        },
    )
    def get(self, request: Request, request_id: uuid.UUID) -> Response:
        handler = GetLicenseRequestHandler(request_repository=_request_repo)
        result = async_to_sync(handler.handle)(
            GetLicenseRequestQuery(actor=actor_from(request), request_id=request_id)
        )
        return Response(LicenseRequestSerializer(result).data)

    @extend_schema(
        operation_id="portal_edit_request",
        summary="Edit License Request",
        description="Change names, account IDs or reason while the request is pending.",
        tags=["Portal API"],
        request=EditLicenseRequestSerializer,
        responses={
            200: LicenseRequestSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Not the owner"},
            404: {"description": "License request not found"},
            422: {"description": "Request is no longer pending"},
        },
    )
    def patch(self, request: Request, request_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_edit_request)(request, request_id, actor_from(request))

    async def _handle_edit_request(
        self, request: Request, request_id: uuid.UUID, actor: Actor
    ) -> Response:
        """Async handler for edit license request."""
        with tracer.start_as_current_span("edit_license_request") as span:
            span.set_attribute("operation", "edit_license_request")
            span.set_attribute("request.id", str(request_id))

            serializer = EditLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data

            handler = EditLicenseRequestHandler(
                request_repository=_request_repo,
                unit_of_work=_unit_of_work,
            )
            result = await handler.handle(
                EditLicenseRequestCommand(
                    actor=actor,
                    request_id=request_id,
                    first_name=data.get("first_name"),
                    last_name=data.get("last_name"),
                    account_ids=data.get("account_ids"),
                    reason=data.get("reason"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseRequestSerializer(result).data)


class SubmitPaymentView(APIView):
    """View for submitting proof of payment for a request."""

    @extend_schema(
        operation_id="portal_submit_payment",
        summary="Submit Payment",
        description=(
            "Attach proof of payment to a license request. The request moves to "
            "pending_payment until an admin verifies the payment."
        ),
        tags=["Portal API"],
        request=SubmitPaymentSerializer,
        responses={
            201: PaymentSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Not the owner"},
            404: {"description": "Request, plan or payment method not found"},
            422: {"description": "Request already approved"},
        },
    )
    def post(self, request: Request, request_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_submit_payment)(
            request, request_id, actor_from(request)
        )

    async def _handle_submit_payment(
        self, request: Request, request_id: uuid.UUID, actor: Actor
    ) -> Response:
        """Async handler for submit payment."""
        with tracer.start_as_current_span("submit_payment") as span:
            span.set_attribute("operation", "submit_payment")
            span.set_attribute("request.id", str(request_id))

            serializer = SubmitPaymentSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data

            handler = SubmitPaymentHandler(
                request_repository=_request_repo,
                plan_repository=_plan_repo,
                method_repository=_method_repo,
                unit_of_work=_unit_of_work,
            )
            result = await handler.handle(
                SubmitPaymentCommand(
                    actor=actor,
                    request_id=request_id,
                    subscription_plan_id=data["subscription_plan_id"],
                    payment_method_id=data["payment_method_id"],
                    amount=data["amount"],
                    currency=data.get("currency") or None,
                    proof=data["proof"],
                    transaction_reference=data.get("transaction_reference"),
                )
            )

            span.set_attribute("payment.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(PaymentSerializer(result).data, status=status.HTTP_201_CREATED)


class PaymentListView(APIView):
    """View for listing the caller's payments."""

    @extend_schema(
        operation_id="portal_list_payments",
        summary="List My Payments",
        tags=["Portal API"],
        parameters=[
            OpenApiParameter(name="status", type=str, required=False),
            OpenApiParameter(name="page", type=int, required=False),
            OpenApiParameter(name="limit", type=int, required=False),
        ],
        responses={200: PaymentSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        actor = Actor(user_id=request.user.pk, is_admin=False)
        handler = ListPaymentsHandler(payment_repository=_payment_repo)
        page = async_to_sync(handler.handle)(
            ListPaymentsQuery(
                actor=actor,
                status=request.query_params.get("status"),
                **page_params(request),
            )
        )
        return Response(page_data(page, PaymentSerializer))


class PaymentDetailView(APIView):
    """View for one of the caller's payments."""

    @extend_schema(
        operation_id="portal_get_payment",
        summary="Get Payment",
        tags=["Portal API"],
        responses={
            200: PaymentSerializer,
            403: {"description": "Not the owner"},
            404: {"description": "Payment not found"},
        },
    )
    def get(self, request: Request, payment_id: uuid.UUID) -> Response:
        handler = GetPaymentHandler(payment_repository=_payment_repo)
        result = async_to_sync(handler.handle)(
            GetPaymentQuery(actor=actor_from(request), payment_id=payment_id)
        )
        return Response(PaymentSerializer(result).data)
