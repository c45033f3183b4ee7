"""
TableBooking – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from .custom_exceptions import (
    APIException,
    InvalidInputException,
    SearchTimeoutException,
    StoreUnavailableException,
)

__all__ = [
    "APIException",
    "InvalidInputException",
    "StoreUnavailableException",
    "SearchTimeoutException",
]
