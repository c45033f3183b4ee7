"""
Development settings for TableBooking project.

These settings override the base settings for local development environments.
"""

from .base import *  # noqa: F401,F403
from .base import BASE_DIR, DATABASES, env

SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")

DEBUG = env("DEBUG", "True") == "True"

ALLOWED_HOSTS = ["*"]

# Local SQLite unless a Postgres host is configured
if not env("POSTGRES_HOST"):
    DATABASES["default"] = {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
