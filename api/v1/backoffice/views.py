"""
Backoffice API views.

These endpoints are used by staff users to:
- Review, decide and delete license requests
- Verify or reject submitted payments
- Issue and maintain licenses directly
- Manage the subscription plan and payment method catalog

Admin capability is enforced by the application handlers.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.backoffice.serializers import (
    IssueLicenseSerializer,
    PaymentDecisionInputSerializer,
    PaymentMethodInputSerializer,
    RequestDecisionInputSerializer,
    SubscriptionPlanInputSerializer,
    UpdateLicenseSerializer,
)
from api.v1.common import actor_from, page_data, page_params, validation_failed
from api.v1.serializers import (
    LicenseRequestSerializer,
    LicenseSerializer,
    PaymentDecisionSerializer,
    PaymentMethodSerializer,
    PaymentSerializer,
    RequestDecisionSerializer,
    SubscriptionPlanSerializer,
)
from catalog.application.commands.payment_method_commands import (
    CreatePaymentMethodCommand,
    UpdatePaymentMethodCommand,
)
from catalog.application.commands.subscription_plan_commands import (
    CreateSubscriptionPlanCommand,
    UpdateSubscriptionPlanCommand,
)
from catalog.application.handlers.catalog_handlers import (
    CreatePaymentMethodHandler,
    CreateSubscriptionPlanHandler,
    ListPaymentMethodsHandler,
    ListSubscriptionPlansHandler,
    UpdatePaymentMethodHandler,
    UpdateSubscriptionPlanHandler,
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
from license_requests.application.commands.decide_license_request import (
    DecideLicenseRequestCommand,
)
from license_requests.application.commands.delete_license_request import (
    DeleteLicenseRequestCommand,
)
from license_requests.application.handlers.decide_license_request_handler import (
    DecideLicenseRequestHandler,
)
from license_requests.application.handlers.license_request_handlers import (
    DeleteLicenseRequestHandler,
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
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    DeleteLicenseHandler,
    GetLicenseHandler,
    ListLicensesHandler,
    UpdateLicenseHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from payments.application.commands.decide_payment import DecidePaymentCommand
from payments.application.handlers.decide_payment_handler import DecidePaymentHandler
from payments.application.handlers.payment_query_handlers import ListPaymentsHandler
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

TRUE_VALUES = ("1", "true", "yes")


def _flag(request: Request, name: str) -> bool:
    return request.query_params.get(name, "").lower() in TRUE_VALUES


LIST_PARAMETERS = [
    OpenApiParameter(name="status", type=str, required=False),
    OpenApiParameter(name="search", type=str, required=False),
    OpenApiParameter(name="page", type=int, required=False),
    OpenApiParameter(name="limit", type=int, required=False),
]


class AdminLicenseRequestListView(APIView):
    """View for the admin request queue."""

    @extend_schema(
        operation_id="admin_list_requests",
        summary="List License Requests",
        description="All requests, newest first, filterable by status and search text.",
        tags=["Backoffice API"],
        parameters=LIST_PARAMETERS,
        responses={200: LicenseRequestSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListLicenseRequestsHandler(request_repository=_request_repo)
        page = async_to_sync(handler.handle)(
            ListLicenseRequestsQuery(
                actor=actor_from(request),
                status=request.query_params.get("status"),
                search=request.query_params.get("search"),
                **page_params(request),
            )
        )
        return Response(page_data(page, LicenseRequestSerializer))


class AdminLicenseRequestDetailView(APIView):
    """View for reading and deleting a single request."""

    @extend_schema(
        operation_id="admin_get_request",
        summary="Get License Request",
        tags=["Backoffice API"],
        responses={200: LicenseRequestSerializer, 404: {"description": "Not found"}},
    )
    def get(self, request: Request, request_id: uuid.UUID) -> Response:
        handler = GetLicenseRequestHandler(request_repository=_request_repo)
        result = async_to_sync(handler.handle)(
            GetLicenseRequestQuery(actor=actor_from(request), request_id=request_id)
        )
        return Response(LicenseRequestSerializer(result).data)

    @extend_schema(
        operation_id="admin_delete_request",
        summary="Delete License Request",
        description=(
            "Delete a request. Approved requests are only deleted with "
            "revoke_license=true, which also deletes the licenses they issued."
        ),
        tags=["Backoffice API"],
        parameters=[OpenApiParameter(name="revoke_license", type=bool, required=False)],
        responses={
            204: None,
            404: {"description": "Not found"},
            422: {"description": "Approved request without revoke_license"},
        },
    )
    def delete(self, request: Request, request_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete_request)(
            request_id, actor_from(request), _flag(request, "revoke_license")
        )

    async def _handle_delete_request(
        self, request_id: uuid.UUID, actor: Actor, revoke_license: bool
    ) -> Response:
        """Async handler for delete license request."""
        with tracer.start_as_current_span("delete_license_request") as span:
            span.set_attribute("operation", "delete_license_request")
            span.set_attribute("request.id", str(request_id))
            span.set_attribute("revoke_license", revoke_license)

            handler = DeleteLicenseRequestHandler(
                request_repository=_request_repo,
                unit_of_work=_unit_of_work,
            )
            await handler.handle(
                DeleteLicenseRequestCommand(
                    actor=actor, request_id=request_id, revoke_license=revoke_license
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class LicenseRequestDecisionView(APIView):
    """View for approving, rejecting or exempting a request."""

    @extend_schema(
        operation_id="admin_decide_request",
        summary="Decide License Request",
        description=(
            "action=approve or exempt issues a license that expires at expiry_date. "
            "action=reject closes the request with the admin notes."
        ),
        tags=["Backoffice API"],
        request=RequestDecisionInputSerializer,
        responses={
            200: RequestDecisionSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Not found"},
            422: {"description": "Request cannot take this decision or changed concurrently"},
        },
    )
    def post(self, request: Request, request_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_decide_request)(
            request, request_id, actor_from(request)
        )

    async def _handle_decide_request(
        self, request: Request, request_id: uuid.UUID, actor: Actor
    ) -> Response:
        """Async handler for decide license request."""
        with tracer.start_as_current_span("decide_license_request") as span:
            span.set_attribute("operation", "decide_license_request")
            span.set_attribute("request.id", str(request_id))

            serializer = RequestDecisionInputSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data
            span.set_attribute("decision.action", data["action"])

            handler = DecideLicenseRequestHandler(
                request_repository=_request_repo,
                unit_of_work=_unit_of_work,
            )
            result = await handler.handle(
                DecideLicenseRequestCommand(
                    actor=actor,
                    request_id=request_id,
                    action=data["action"],
                    expires_at=data.get("expiry_date"),
                    admin_notes=data.get("admin_notes"),
                )
            )

            if result.license:
                span.set_attribute("license.id", str(result.license.id))
            span.set_status(Status(StatusCode.OK))
            return Response(RequestDecisionSerializer(result).data)


class AdminPaymentListView(APIView):
    """View for the admin payment queue."""

    @extend_schema(
        operation_id="admin_list_payments",
        summary="List Payments",
        tags=["Backoffice API"],
        parameters=[
            OpenApiParameter(name="status", type=str, required=False),
            OpenApiParameter(name="request_id", type=str, required=False),
            OpenApiParameter(name="page", type=int, required=False),
            OpenApiParameter(name="limit", type=int, required=False),
        ],
        responses={200: PaymentSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        request_id = request.query_params.get("request_id")
        try:
            request_uuid = uuid.UUID(request_id) if request_id else None
        except ValueError:
            request_uuid = None
        handler = ListPaymentsHandler(payment_repository=_payment_repo)
        page = async_to_sync(handler.handle)(
            ListPaymentsQuery(
                actor=actor_from(request),
                status=request.query_params.get("status"),
                request_id=request_uuid,
                **page_params(request),
            )
        )
        return Response(page_data(page, PaymentSerializer))


class PaymentDecisionView(APIView):
    """View for verifying or rejecting a payment."""

    @extend_schema(
        operation_id="admin_decide_payment",
        summary="Decide Payment",
        description=(
            "action=verify marks the payment verified; with expiry_date it also "
            "approves the linked request and issues its license. action=reject "
            "records the reason and lets the user resubmit."
        ),
        tags=["Backoffice API"],
        request=PaymentDecisionInputSerializer,
        responses={
            200: PaymentDecisionSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Not found"},
            422: {"description": "Payment cannot take this decision or changed concurrently"},
        },
    )
    def post(self, request: Request, payment_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_decide_payment)(
            request, payment_id, actor_from(request)
        )

    async def _handle_decide_payment(
        self, request: Request, payment_id: uuid.UUID, actor: Actor
    ) -> Response:
        """Async handler for decide payment."""
        with tracer.start_as_current_span("decide_payment") as span:
            span.set_attribute("operation", "decide_payment")
            span.set_attribute("payment.id", str(payment_id))

            serializer = PaymentDecisionInputSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data
            span.set_attribute("decision.action", data["action"])

            handler = DecidePaymentHandler(
                payment_repository=_payment_repo,
                request_repository=_request_repo,
                unit_of_work=_unit_of_work,
            )
            result = await handler.handle(
                DecidePaymentCommand(
                    actor=actor,
                    payment_id=payment_id,
                    action=data["action"],
                    expires_at=data.get("expiry_date"),
                    reason=data.get("reason"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(PaymentDecisionSerializer(result).data)


class AdminLicenseListCreateView(APIView):
    """View for listing and directly issuing licenses."""

    @extend_schema(
        operation_id="admin_list_licenses",
        summary="List Licenses",
        tags=["Backoffice API"],
        parameters=LIST_PARAMETERS,
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListLicensesHandler(license_repository=_license_repo)
        page = async_to_sync(handler.handle)(
            ListLicensesQuery(
                actor=actor_from(request),
                status=request.query_params.get("status"),
                search=request.query_params.get("search"),
                **page_params(request),
            )
        )
        return Response(page_data(page, LicenseSerializer))

    @extend_schema(
        operation_id="admin_issue_license",
        summary="Issue License",
        description="Issue an active license outside the request flow.",
        tags=["Backoffice API"],
        request=IssueLicenseSerializer,
        responses={201: LicenseSerializer, 400: {"description": "Bad Request"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_issue_license)(request, actor_from(request))

    async def _handle_issue_license(self, request: Request, actor: Actor) -> Response:
        """Async handler for issue license."""
        with tracer.start_as_current_span("issue_license") as span:
            span.set_attribute("operation", "issue_license")

            serializer = IssueLicenseSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data

            handler = IssueLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                IssueLicenseCommand(
                    actor=actor,
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    account_ids=data["account_ids"],
                    expires_at=data["expiry_date"],
                    metadata=data.get("metadata", {}),
                )
            )

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_201_CREATED)


class AdminLicenseDetailView(APIView):
    """View for reading, changing and deleting a license."""

    @extend_schema(
        operation_id="admin_get_license",
        summary="Get License",
        tags=["Backoffice API"],
        responses={200: LicenseSerializer, 404: {"description": "Not found"}},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        handler = GetLicenseHandler(license_repository=_license_repo)
        result = async_to_sync(handler.handle)(
            GetLicenseQuery(actor=actor_from(request), license_id=license_id)
        )
        return Response(LicenseSerializer(result).data)

    @extend_schema(
        operation_id="admin_update_license",
        summary="Update License",
        tags=["Backoffice API"],
        request=UpdateLicenseSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Not found"},
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update_license)(
            request, license_id, actor_from(request)
        )

    async def _handle_update_license(
        self, request: Request, license_id: uuid.UUID, actor: Actor
    ) -> Response:
        """Async handler for update license."""
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("operation", "update_license")
            span.set_attribute("license.id", str(license_id))

            serializer = UpdateLicenseSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            data = serializer.validated_data

            handler = UpdateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                UpdateLicenseCommand(
                    actor=actor,
                    license_id=license_id,
                    first_name=data.get("first_name"),
                    last_name=data.get("last_name"),
                    account_ids=data.get("account_ids"),
                    expires_at=data.get("expiry_date"),
                    status=data.get("status"),
                    metadata=data.get("metadata"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data)

    @extend_schema(
        operation_id="admin_delete_license",
        summary="Delete License",
        tags=["Backoffice API"],
        responses={204: None, 404: {"description": "Not found"}},
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        handler = DeleteLicenseHandler(license_repository=_license_repo)
        async_to_sync(handler.handle)(
            DeleteLicenseCommand(actor=actor_from(request), license_id=license_id)
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminSubscriptionPlanListCreateView(APIView):
    """View for listing and creating subscription plans."""

    @extend_schema(
        operation_id="admin_list_plans",
        summary="List Subscription Plans",
        tags=["Backoffice API"],
        parameters=[OpenApiParameter(name="include_inactive", type=bool, required=False)],
        responses={200: SubscriptionPlanSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListSubscriptionPlansHandler(plan_repository=_plan_repo)
        plans = async_to_sync(handler.handle)(
            ListSubscriptionPlansQuery(
                actor=actor_from(request),
                include_inactive=_flag(request, "include_inactive"),
            )
        )
        return Response(SubscriptionPlanSerializer(plans, many=True).data)

    @extend_schema(
        operation_id="admin_create_plan",
        summary="Create Subscription Plan",
        tags=["Backoffice API"],
        request=SubscriptionPlanInputSerializer,
        responses={
            201: SubscriptionPlanSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Name already taken"},
        },
    )
    def post(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_subscription_plan") as span:
            serializer = SubscriptionPlanInputSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            handler = CreateSubscriptionPlanHandler(plan_repository=_plan_repo)
            result = async_to_sync(handler.handle)(
                CreateSubscriptionPlanCommand(actor=actor_from(request), **serializer.validated_data)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                SubscriptionPlanSerializer(result).data, status=status.HTTP_201_CREATED
            )


class AdminSubscriptionPlanDetailView(APIView):
    """View for changing a subscription plan."""

    @extend_schema(
        operation_id="admin_update_plan",
        summary="Update Subscription Plan",
        tags=["Backoffice API"],
        request=SubscriptionPlanInputSerializer,
        responses={200: SubscriptionPlanSerializer, 404: {"description": "Not found"}},
    )
    def patch(self, request: Request, plan_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_subscription_plan") as span:
            span.set_attribute("plan.id", str(plan_id))
            serializer = SubscriptionPlanInputSerializer(data=request.data, partial=True)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            handler = UpdateSubscriptionPlanHandler(plan_repository=_plan_repo)
            result = async_to_sync(handler.handle)(
                UpdateSubscriptionPlanCommand(
                    actor=actor_from(request), plan_id=plan_id, **serializer.validated_data
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(SubscriptionPlanSerializer(result).data)


class AdminPaymentMethodListCreateView(APIView):
    """View for listing and creating payment methods."""

    @extend_schema(
        operation_id="admin_list_payment_methods",
        summary="List Payment Methods",
        tags=["Backoffice API"],
        parameters=[OpenApiParameter(name="include_inactive", type=bool, required=False)],
        responses={200: PaymentMethodSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        handler = ListPaymentMethodsHandler(method_repository=_method_repo)
        methods = async_to_sync(handler.handle)(
            ListPaymentMethodsQuery(
                actor=actor_from(request),
                include_inactive=_flag(request, "include_inactive"),
            )
        )
        return Response(PaymentMethodSerializer(methods, many=True).data)

    @extend_schema(
        operation_id="admin_create_payment_method",
        summary="Create Payment Method",
        tags=["Backoffice API"],
        request=PaymentMethodInputSerializer,
        responses={
            201: PaymentMethodSerializer,
            400: {"description": "Bad Request"},
        },
    )
    def post(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_payment_method") as span:
            serializer = PaymentMethodInputSerializer(data=request.data)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            handler = CreatePaymentMethodHandler(method_repository=_method_repo)
            result = async_to_sync(handler.handle)(
                CreatePaymentMethodCommand(actor=actor_from(request), **serializer.validated_data)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(PaymentMethodSerializer(result).data, status=status.HTTP_201_CREATED)


class AdminPaymentMethodDetailView(APIView):
    """View for changing a payment method."""

    @extend_schema(
        operation_id="admin_update_payment_method",
        summary="Update Payment Method",
        tags=["Backoffice API"],
        request=PaymentMethodInputSerializer,
        responses={200: PaymentMethodSerializer, 404: {"description": "Not found"}},
    )
    def patch(self, request: Request, method_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_payment_method") as span:
            span.set_attribute("payment_method.id", str(method_id))
            serializer = PaymentMethodInputSerializer(data=request.data, partial=True)
            if not serializer.is_valid():
                return validation_failed(span, serializer.errors)
            handler = UpdatePaymentMethodHandler(method_repository=_method_repo)
            result = async_to_sync(handler.handle)(
                UpdatePaymentMethodCommand(
                    actor=actor_from(request), method_id=method_id, **serializer.validated_data
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(PaymentMethodSerializer(result).data)
