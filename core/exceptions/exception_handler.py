"""
Global exception handler for the TableBooking platform.

This module provides a custom exception handler for DRF that renders the
platform's own exceptions consistently and defers everything else to DRF.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .custom_exceptions import APIException

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Convert platform exceptions into JSON responses.

    Args:
        exc: The raised exception
        context: DRF handler context (view, request, ...)

    Returns:
        Response, or None to let Django handle the exception
    """
    if isinstance(exc, APIException):
        view = context.get("view")
        view_name = view.__class__.__name__ if view is not None else "unknown"
        if exc.is_transient:
            logger.error(f"{view_name} failed with {exc.code}: {exc.message}")
        else:
            logger.info(f"{view_name} rejected request with {exc.code}: {exc.message}")
        return Response(exc.to_dict(), status=exc.status_code)

    return drf_exception_handler(exc, context)
