"""
Validation of availability search input.

Every function raises ``InvalidInputException`` naming the offending field,
so the presentation layer can report a field-level reason. Nothing here
touches the database.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.geoapp.utils.geo_validators import validate_latitude, validate_longitude
from core.enums import NO_PREFERENCE, SeatingCategory
from core.exceptions import InvalidInputException
from utils.config import booking_setting

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


@dataclass(frozen=True)
class SearchRequest:
    """A validated, normalised availability search."""

    latitude: float
    longitude: float
    radius_meters: float
    target_date: date
    target_time: time
    party_size: int
    seating_category: Optional[str]


def validate_coordinates(latitude, longitude):
    """Return (lat, lng) as floats or raise InvalidInputException."""
    for field, value, validator in (
        ("latitude", latitude, validate_latitude),
        ("longitude", longitude, validate_longitude),
    ):
        if isinstance(value, bool):
            raise InvalidInputException(f"{field.capitalize()} must be a valid number", field=field)
        try:
            validator(value)
        except ValidationError as e:
            raise InvalidInputException(e.messages[0], field=field) from e
    return float(latitude), float(longitude)


def validate_radius(radius_meters, maximum=None):
    if isinstance(radius_meters, bool):
        raise InvalidInputException("Radius must be a number", field="radius_meters")
    try:
        radius = float(radius_meters)
    except (TypeError, ValueError):
        raise InvalidInputException("Radius must be a number", field="radius_meters")

    if not math.isfinite(radius) or radius <= 0:
        raise InvalidInputException("Radius must be greater than zero", field="radius_meters")

    if maximum is None:
        maximum = booking_setting("MAX_SEARCH_RADIUS_METERS")
    if radius > maximum:
        raise InvalidInputException(
            f"Radius must not exceed {maximum:g} meters", field="radius_meters"
        )
    return radius


def parse_date(value):
    """Accept a date or an ISO-8601 ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_RE.match(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise InvalidInputException("Invalid date format (YYYY-MM-DD)", field="date")


def parse_time(value):
    """Accept a time or a 24h ``HH:MM`` string."""
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        match = TIME_RE.match(value)
        if match:
            return time(int(match.group(1)), int(match.group(2)))
    raise InvalidInputException("Invalid time format (HH:MM)", field="time")


def validate_reservation_date(target_date, allow_past_dates=None):
    """Reject dates before today unless the caller is allowed to look back."""
    if allow_past_dates is None:
        allow_past_dates = booking_setting("ALLOW_PAST_DATES")
    if not allow_past_dates and target_date < timezone.localdate():
        raise InvalidInputException("Date must not be in the past", field="date")
    return target_date


def validate_party_size(party_size, minimum=None, maximum=None):
    if isinstance(party_size, bool) or not isinstance(party_size, int):
        raise InvalidInputException("Party size must be an integer", field="party_size")

    minimum = booking_setting("MIN_PARTY_SIZE") if minimum is None else minimum
    maximum = booking_setting("MAX_PARTY_SIZE") if maximum is None else maximum

    if party_size < max(minimum, 1):
        raise InvalidInputException("Party size too small", field="party_size")
    if party_size > maximum:
        raise InvalidInputException("Party size too large", field="party_size")
    return party_size


def normalize_seating_category(value):
    """
    Return the SeatingCategory value, or None when no filter applies.

    Matching is case-insensitive; ``no_preference`` and blanks mean no filter.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputException("Invalid seating preference", field="seating_category")

    normalized = value.strip().upper()
    if normalized in ("", NO_PREFERENCE):
        return None
    if normalized not in SeatingCategory.values:
        raise InvalidInputException("Invalid seating preference", field="seating_category")
    return normalized


def validate_search_request(
    latitude,
    longitude,
    radius_meters,
    target_date,
    target_time,
    party_size,
    seating_category=None,
    allow_past_dates=None,
):
    """Validate every search field, failing on the first bad one."""
    lat, lng = validate_coordinates(latitude, longitude)
    radius = validate_radius(radius_meters)
    parsed_date = validate_reservation_date(parse_date(target_date), allow_past_dates)
    parsed_time = parse_time(target_time)
    size = validate_party_size(party_size)
    category = normalize_seating_category(seating_category)

    return SearchRequest(
        latitude=lat,
        longitude=lng,
        radius_meters=radius,
        target_date=parsed_date,
        target_time=parsed_time,
        party_size=size,
        seating_category=category,
    )
