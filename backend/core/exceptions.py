import logging
import traceback

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

from .responses import failure

logger = logging.getLogger(__name__)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ("detail", "non_field_errors"):
                return message
            return f"{field}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc, context):
    """Render every error as `{success: false, message, error}`.

    API exceptions keep their status code. Anything else is an unexpected
    failure and becomes a 500 carrying the traceback while DEBUG is on.
    """

    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or "Not found.")
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data
        response.data = {
            "success": False,
            "message": _first_message(detail),
            "error": detail,
        }
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "request")
    error = {"type": exc.__class__.__name__}
    if settings.DEBUG:
        error["trace"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return failure(
        f"Internal server error - {exc}",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=error,
    )
