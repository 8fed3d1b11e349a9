"""DRF exception handling shared by every app.

Errors raised by DRF itself (validation, authentication, throttling, 404)
keep their standard payloads. Anything else is an infrastructure failure:
it is logged with the traceback and answered with a generic 500 so no
internal detail leaks to the client.
"""

from __future__ import annotations

import structlog
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

logger = structlog.get_logger(__name__)


def api_exception_handler(exc, context):  # type: ignore
    response = exception_handler(exc, context)
    if response is not None:
        return response

    request = context.get("request")
    view = context.get("view")
    logger.error(
        "unhandled_api_error",
        view=view.__class__.__name__ if view is not None else None,
        method=getattr(request, "method", None),
        path=getattr(request, "path", None),
        error=str(exc),
        exc_info=exc,
    )
    return Response(
        {"detail": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
