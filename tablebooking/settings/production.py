"""
Production settings for TableBooking project.

These settings override the base settings for production environments.
"""

import os

from .base import *  # noqa: F401,F403
from .base import DATABASES, TABLEBOOKING

DEBUG = os.environ.get("DEBUG", "False").lower() == "true"

SECRET_KEY = os.environ.get("SECRET_KEY")
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable not set!")

DATABASES["default"]["OPTIONS"]["sslmode"] = os.environ.get("POSTGRES_SSL_MODE", "require")

# Searches never run past the platform budget in production
TABLEBOOKING["ALLOW_PAST_DATES"] = False

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_CONTENT_TYPE_NOSNIFF = True
