"""
Helpers shared by the v1 views.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from core.application.pagination import Page
from core.domain.value_objects import Actor
from core.instrumentation import Status, StatusCode


def actor_from(request: Request) -> Actor:
    """Build the handler-facing actor from the authenticated user."""
    user = request.user
    return Actor(user_id=user.pk, is_admin=bool(user.is_staff))


def validation_failed(span, errors) -> Response:
    """Mark the span failed and return the standard 400 body."""
    span.set_attribute("error", "validation_failed")
    span.set_attribute("error.details", str(errors))
    span.set_status(Status(StatusCode.ERROR, "Validation failed"))
    return Response(
        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "details": errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def page_data(page: Page, serializer_class) -> dict:
    """Render a Page with the given item serializer."""
    return {
        "results": serializer_class(page.items, many=True).data,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "pages": page.pages,
    }


def page_params(request: Request) -> dict:
    """page/limit query parameters; bad values fall back to defaults."""
    params = {}
    for name in ("page", "limit"):
        raw = request.query_params.get(name)
        if raw and raw.isdigit():
            params[name] = int(raw)
    return params
