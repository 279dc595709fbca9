"""
MT5 Expert Advisor API views.

Unauthenticated, rate-limited endpoints polled by trading terminals to
check whether an account is licensed.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.mt5.serializers import ValidateAccountSerializer, ValidatedLicenseSerializer
from core.domain.exceptions import AccountNotLicensedError, InvalidAccountIdError
from core.domain.value_objects import utcnow
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.validate_account_handler import ValidateAccountHandler
from licenses.application.queries.validate_account import ValidateAccountQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class ValidateAccountView(APIView):
    """View for validating an MT5 account."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="mt5_validate_account",
        summary="Validate MT5 Account",
        description=(
            "Return the license covering a numeric MT5 account ID. "
            "Never requires credentials and never changes state."
        ),
        tags=["MT5 API"],
        request=ValidateAccountSerializer,
        responses={
            200: ValidatedLicenseSerializer,
            400: {"description": "Invalid account ID"},
            404: {"description": "Account is not licensed"},
            429: {"description": "Rate limit exceeded"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_validate_account)(request)

    async def _handle_validate_account(self, request: Request) -> Response:
        """Async handler for validate account."""
        with tracer.start_as_current_span("validate_account") as span:
            span.set_attribute("operation", "validate_account")

            serializer = ValidateAccountSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    {
                        "success": False,
                        "error": "Account ID is required",
                        "isActive": False,
                    },
                    status=status.HTTP_400_BAD_REQUEST,
                )
            account_id = serializer.validated_data["account_id"]
            span.set_attribute("account.id", account_id)

            handler = ValidateAccountHandler(license_repository=_license_repo)
            try:
                result = await handler.handle(ValidateAccountQuery(account_id=account_id))
            except InvalidAccountIdError as e:
                span.set_status(Status(StatusCode.ERROR, e.message))
                return Response(
                    {"success": False, "error": e.message, "isActive": False},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            except AccountNotLicensedError as e:
                span.set_attribute("license.found", False)
                span.set_status(Status(StatusCode.OK))
                return Response(
                    {"success": False, "error": e.message, "isActive": False},
                    status=status.HTTP_404_NOT_FOUND,
                )

            span.set_attribute("license.found", True)
            span.set_attribute("license.is_active", result.is_active)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "license": ValidatedLicenseSerializer(result).data}
            )


class PingView(APIView):
    """Connectivity check for the Expert Advisor."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="mt5_ping",
        summary="Ping",
        tags=["MT5 API"],
        responses={200: {"description": "Service reachable"}},
    )
    def get(self, request: Request) -> Response:
        return Response({"success": True, "timestamp": utcnow().isoformat()})

    def post(self, request: Request) -> Response:
        return self.get(request)
