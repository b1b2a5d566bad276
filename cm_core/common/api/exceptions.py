# cm_core/common/api/exceptions.py
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Request id for error bodies: the caller's X-Request-Id when sent,
    otherwise a new hex uuid. Cached on the request.
    """
    if request is None:
        return uuid.uuid4().hex

    rid = getattr(request, "request_id", None)
    if not rid:
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex
        request.request_id = rid
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }


class ConflictError(APIException):
    """
    409: the row's current state forbids the action, e.g. paying a paid
    invoice, dispensing twice, subtracting more stock than is on hand.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


_CODES = (
    (ValidationError, "validation_error"),
    (NotAuthenticated, "not_authenticated"),
    (PermissionDenied, "permission_denied"),
    (Http404, "not_found"),
)


def _code_for(exc: Exception, http_status: int) -> str:
    for exc_type, code in _CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", None) or "api_error"
    return "server_error" if http_status >= 500 else "error"


def _message_and_details(data: Any) -> tuple[str, Any]:
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), rest or None
    if isinstance(data, list) and len(data) == 1:
        return str(data[0]), None
    # field errors and anything else go to details
    return "Request failed.", data


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
        body = build_error_envelope(request=request, code="server_error", message="Unexpected server error.")
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    message, details = _message_and_details(response.data)
    body = build_error_envelope(
        request=request,
        code=_code_for(exc, response.status_code),
        message=message,
        details=details,
    )
    return Response(body, status=response.status_code, headers=response.headers)
