"""
Test settings for TableBooking project.

These settings override the base settings for test environments.
"""

from .base import *  # noqa: F401,F403
from .base import BASE_DIR, TABLEBOOKING

# File-backed SQLite so worker threads in TransactionTestCase share the data
TEST_DB_DIR = BASE_DIR / "tmp"
TEST_DB_DIR.mkdir(parents=True, exist_ok=True)

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": TEST_DB_DIR / "test_db.sqlite3",
        "TEST": {"NAME": TEST_DB_DIR / "test_db.sqlite3"},
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

USE_I18N = False

TABLEBOOKING = {
    **TABLEBOOKING,
    "MIN_PARTY_SIZE": 1,
    "MAX_PARTY_SIZE": 20,
    "MAX_TABLE_CAPACITY": 30,
    "MAX_SEARCH_RADIUS_METERS": 50000.0,
    "SEARCH_TIMEOUT_SECONDS": 5.0,
    "ALLOW_PAST_DATES": False,
    "UNASSIGNED_RESERVATION_BLOCKS_LOCATION": True,
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}
