# tablebooking/settings/base.py
"""
TableBooking – shared Django settings (development, staging, production).

Environment-specific values **must** come from the environment (.env or real env
vars). Do not hard-code credentials or hostnames in this file.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from decouple import config
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Paths & dotenv
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

if "production" in os.environ.get("DJANGO_SETTINGS_MODULE", ""):
    load_dotenv(BASE_DIR / ".env.production")
else:
    load_dotenv(BASE_DIR / ".env")

TESTING = any(cmd in sys.argv for cmd in ("test", "pytest"))


def env(key: str, default: Optional[str] = None, *, required: bool = False) -> str:
    val = os.getenv(key, default)
    if required and (val is None or val == ""):
        raise RuntimeError(f"The environment variable {key} is required but not set.")
    return val


# ---------------------------------------------------------------------------
# Core toggles
# ---------------------------------------------------------------------------
SECRET_KEY = config("SECRET_KEY", default="django-insecure-fallback-key-change-me-in-env")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config(
    "ALLOWED_HOSTS", default="127.0.0.1,localhost", cast=lambda v: [s.strip() for s in v.split(",")]
)

# ---------------------------------------------------------------------------
# Database – PostgreSQL, optional read replica
# ---------------------------------------------------------------------------
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": config("POSTGRES_DB", default="tablebooking"),
        "USER": config("POSTGRES_USER", default="tablebooking"),
        "PASSWORD": config("POSTGRES_PASSWORD", default="tablebooking"),
        "HOST": config("POSTGRES_HOST", default="db"),
        "PORT": config("POSTGRES_PORT", default="5432"),
        "CONN_MAX_AGE": 600,
        "OPTIONS": {
            "connect_timeout": 10,
            "sslmode": config("POSTGRES_SSL_MODE", default="prefer"),
            "application_name": "tablebooking",
        },
        "CONN_HEALTH_CHECKS": True,
    }
}

# Availability searches are read-only, so they may be served by a replica.
if config("POSTGRES_REPLICA_HOST", default=""):
    DATABASES["replica"] = {
        **DATABASES["default"],
        "HOST": config("POSTGRES_REPLICA_HOST"),
        "PORT": config("POSTGRES_REPLICA_PORT", default=DATABASES["default"]["PORT"]),
        "TEST": {"MIRROR": "default"},
    }

DATABASE_ROUTERS = ["tablebooking.db_routers.ReplicationRouter"]
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third-party
    "rest_framework",
    # Local
    "core",
    "apps.geoapp",
    "apps.tableapp",
    "apps.bookingapp",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "tablebooking.urls"
WSGI_APPLICATION = "tablebooking.wsgi.application"

# ---------------------------------------------------------------------------
# I18N / time
# ---------------------------------------------------------------------------
LANGUAGE_CODE = "en"
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

# ---------------------------------------------------------------------------
# REST framework
# ---------------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "core.exceptions.exception_handler.custom_exception_handler",
}

# ---------------------------------------------------------------------------
# Availability search / booking platform limits
# ---------------------------------------------------------------------------
TABLEBOOKING = {
    "MIN_PARTY_SIZE": config("MIN_PARTY_SIZE", default=1, cast=int),
    "MAX_PARTY_SIZE": config("MAX_PARTY_SIZE", default=20, cast=int),
    "MAX_TABLE_CAPACITY": config("MAX_TABLE_CAPACITY", default=30, cast=int),
    "MAX_SEARCH_RADIUS_METERS": config("MAX_SEARCH_RADIUS_METERS", default=50000.0, cast=float),
    "SEARCH_TIMEOUT_SECONDS": config("SEARCH_TIMEOUT_SECONDS", default=5.0, cast=float),
    "ALLOW_PAST_DATES": config("ALLOW_PAST_DATES", default=False, cast=bool),
    "UNASSIGNED_RESERVATION_BLOCKS_LOCATION": config(
        "UNASSIGNED_RESERVATION_BLOCKS_LOCATION", default=True, cast=bool
    ),
}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_DIR = Path(config("LOG_DIR", default=str(BASE_DIR / "logs")))
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {"format": "{levelname} {message}", "style": "{"},
    },
    "filters": {
        "require_debug_true": {"()": "django.utils.log.RequireDebugTrue"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG" if DEBUG else "INFO",
            "filters": ["require_debug_true"],
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "file": {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_DIR / "tablebooking.log",
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": True,
        },
        "tablebooking": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "apps": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "core": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
