"""
DRF exception handler rendering domain errors.

Configured as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Every error response has
the same body shape:

    {"error": "<message>", "error_code": "<CODE>", "details": {...}}

`details` is present only when there is something to report (serializer
field errors). Unexpected exceptions are left to Django so they surface as
500s and are logged by django.request.
"""

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Convert BaseApplicationError and DRF exceptions into error bodies."""
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        response.data = {
            "error": "Invalid request",
            "error_code": "VALIDATION_ERROR",
            "details": exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail},
        }
    elif isinstance(exc, drf_exceptions.APIException):
        codes = exc.get_codes()
        response.data = {
            "error": str(exc.detail),
            "error_code": codes.upper() if isinstance(codes, str) else "ERROR",
        }
    return response
