"""
REST framework exception handler.

Renders listing service errors and REST framework errors in one shape:
``{"success": false, "error": <kind>, "message": <text>, ...}``.
Unexpected exceptions become ``internal_error`` and only carry diagnostic
text when DEBUG is enabled.
"""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import (
    ContentRejected,
    Forbidden,
    InternalFailure,
    InvalidImage,
    InvalidInput,
    ListingServiceError,
    NotFound,
    Unauthenticated,
    UploadFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    ContentRejected: status.HTTP_400_BAD_REQUEST,
    InvalidImage: status.HTTP_400_BAD_REQUEST,
    UploadFailed: status.HTTP_502_BAD_GATEWAY,
    InternalFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ListingServiceError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_class]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _internal_error_response(exc: Exception) -> Response:
    body = {"success": False, "error": InternalFailure.code, "message": InternalFailure.default_message}
    if settings.DEBUG:
        body["message"] = str(exc) or InternalFailure.default_message
        body["exception"] = type(exc).__name__
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def exception_handler(exc, context):  # type: ignore
    if isinstance(exc, InternalFailure):
        logger.error("Listing service failure: %s", exc, exc_info=exc)
        return _internal_error_response(exc)

    if isinstance(exc, ListingServiceError):
        body = {"success": False}
        body.update(exc.to_dict())
        return Response(body, status=status_for(exc))

    response = drf_exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc
        )
        return _internal_error_response(exc)

    data = response.data
    body = {"success": False, "error": getattr(exc, "default_code", "error")}
    if isinstance(data, dict) and set(data) == {"detail"}:
        body["message"] = str(data["detail"])
    else:
        body["message"] = "Invalid input"
        body["errors"] = data
    response.data = body
    return response
