import logging
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AcadTrackError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "error"


class AuthorizationError(AcadTrackError):
    """Base for every authentication or authorization failure."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "forbidden"


class UnauthenticatedError(AuthorizationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"
    default_code = "unauthenticated"


class ForbiddenError(AuthorizationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "forbidden"


class ValidationError(AcadTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"
    default_code = "invalid"


class NotFoundError(AcadTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class InternalError(AcadTrackError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "internal_error"


def error_message(detail):
    """Flatten DRF error details into a single client-facing message."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return error_message(detail["detail"])
        for value in detail.values():
            return error_message(value)
        return ValidationError.default_detail
    if isinstance(detail, (list, tuple)):
        return error_message(detail[0]) if detail else ValidationError.default_detail
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every API error as ``{"error": "<message>"}``.

    DRF's own authentication and permission failures get the same generic
    messages as ``UnauthenticatedError`` and ``ForbiddenError``.

    Database failures are logged with their traceback and answered with a
    sanitized 500; the raw store message never reaches the client.
    """
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "Data store failure in %s",
            view.__class__.__name__ if view else "unknown view",
            exc_info=exc,
        )
        exc = InternalError()

    if isinstance(exc, Http404):
        exc = NotFoundError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if response.status_code == status.HTTP_401_UNAUTHORIZED:
        message = UnauthenticatedError.default_detail
    elif isinstance(exc, exceptions.PermissionDenied):
        message = ForbiddenError.default_detail
    else:
        message = error_message(response.data)

    return Response(
        {"error": message},
        status=response.status_code,
        headers={
            key: value
            for key, value in response.items()
            if key in ("WWW-Authenticate", "Retry-After")
        },
    )
