"""
Custom exceptions for the TableBooking platform.

This module defines the exception hierarchy raised by the availability
services so that callers (and the DRF exception handler) can tell a bad
request apart from a transient store failure or an exhausted deadline.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class APIException(Exception):
    """Base exception for all API-related exceptions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("An unexpected error occurred.")
    code = "error"

    def __init__(self, message=None, status_code=None, errors=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        self.errors = errors
        super().__init__(str(self.message))

    @property
    def is_transient(self):
        """5xx errors are safe for the client to retry."""
        return self.status_code >= 500

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "message": str(self.message),
            "status_code": self.status_code,
            "code": self.code,
        }

        if self.errors:
            error_dict["errors"] = self.errors

        return error_dict


class InvalidInputException(APIException):
    """Raised when a search request field is malformed or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = _("Invalid data provided.")
    code = "invalid_input"

    def __init__(self, message=None, field=None, errors=None):
        self.field = field
        if errors is None and field:
            errors = {field: [str(message or self.default_message)]}
        super().__init__(message=message, errors=errors)


class StoreUnavailableException(APIException):
    """Raised when the backing store cannot be reached or fails a read."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = _("The booking store is currently unavailable.")
    code = "store_unavailable"

    def __init__(self, message=None, stage=None, cause=None):
        self.stage = stage
        self.cause = cause
        super().__init__(message=message)

    def to_dict(self):
        error_dict = super().to_dict()
        if self.stage:
            error_dict["stage"] = self.stage
        return error_dict


class SearchTimeoutException(APIException):
    """Raised when the caller's deadline elapses before the pipeline completes."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = _("The availability search timed out.")
    code = "timeout"

    def __init__(self, message=None, stage=None):
        self.stage = stage
        super().__init__(message=message)

    def to_dict(self):
        error_dict = super().to_dict()
        if self.stage:
            error_dict["stage"] = self.stage
        return error_dict
