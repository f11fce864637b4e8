"""DRF exception handler translating domain errors into HTTP responses.

DRF's own exceptions (validation, auth, throttling, Http404) keep the
default handling. Domain errors map to status codes below; anything else is
reported as a 500 carrying a trace id that also appears in the logs.
"""

import logging
import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import ConsistencyViolation, InvalidInput, InvalidState, NotFound, ShopError

logger = logging.getLogger("tienda.api")

TRACE_HEADER = "trace-id"

STATUS_BY_ERROR = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (InvalidInput, status.HTTP_400_BAD_REQUEST),
    (InvalidState, status.HTTP_400_BAD_REQUEST),
)


def _internal_error(exc, context) -> Response:
    trace_id = str(uuid.uuid4())
    view = context.get("view")
    logger.error(
        "api.unhandled_error",
        exc_info=exc,
        extra={
            "event": "api.unhandled_error",
            "trace_id": trace_id,
            "view": view.__class__.__name__ if view is not None else None,
            "error_type": exc.__class__.__name__,
        },
    )
    response = Response(
        {"detail": "An unexpected error occurred.", "trace_id": trace_id},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    response[TRACE_HEADER] = trace_id
    return response


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, ShopError) and not isinstance(exc, ConsistencyViolation):
        for error_cls, code in STATUS_BY_ERROR:
            if isinstance(exc, error_cls):
                return Response({"detail": exc.message}, status=code)

    return _internal_error(exc, context)
