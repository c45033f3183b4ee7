"""
Access to the platform's booking limits.

Values live in the ``TABLEBOOKING`` settings dict; anything missing falls back
to ``DEFAULTS`` so a partial override in one environment stays valid.
"""

from django.conf import settings

DEFAULTS = {
    "MIN_PARTY_SIZE": 1,
    "MAX_PARTY_SIZE": 20,
    "MAX_TABLE_CAPACITY": 30,
    "MAX_SEARCH_RADIUS_METERS": 50000.0,
    "SEARCH_TIMEOUT_SECONDS": 5.0,
    "ALLOW_PAST_DATES": False,
    "UNASSIGNED_RESERVATION_BLOCKS_LOCATION": True,
}


def booking_setting(name):
    """Return a TABLEBOOKING setting, falling back to the packaged default."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown TABLEBOOKING setting: {name}")
    overrides = getattr(settings, "TABLEBOOKING", None) or {}
    return overrides.get(name, DEFAULTS[name])
