"""JSON error responses for the todo API.

Every failure leaves the API as `{"error": <short message>}`:
- validation errors -> 400, with the field errors under "details",
- unknown todo ids -> 404,
- anything else -> 500 with the view's failure message, logged with traceback.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from .services import TodoNotFound

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Internal server error"


def _first_message(detail) -> str:
    """Dig the first human readable message out of a DRF error structure."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)):
        for value in detail:
            return _first_message(value)
        return "Invalid input"
    return str(detail)


def failure_message(view, request) -> str:
    messages = getattr(view, "failure_messages", {}) or {}
    method = getattr(request, "method", "") or ""
    return messages.get(method.lower(), GENERIC_FAILURE)


def api_exception_handler(exc, context):
    view = context.get("view")
    request = context.get("request")

    if isinstance(exc, TodoNotFound):
        logger.warning("%s", exc)
        return Response({"error": "Todo not found"}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, ValidationError):
        return Response({"error": _first_message(exc.detail), "details": exc.detail},
                        status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is not None:
        # other DRF errors (bad JSON, method not allowed, ...) keep their status
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {"error": str(detail) if detail is not None else _first_message(response.data)}
        return response

    logger.exception("Unhandled error in %s %s", getattr(request, "method", "?"),
                     getattr(request, "path", "?"))
    set_rollback()
    return Response({"error": failure_message(view, request)},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR)
