import math

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .geo_constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE


def validate_latitude(value):
    """
    Validate that a value is a valid latitude

    Args:
        value: Value to validate

    Raises:
        ValidationError if invalid
    """
    try:
        lat = float(value)
    except (ValueError, TypeError):
        raise ValidationError(_("Latitude must be a valid number"), code="invalid_latitude")

    if not math.isfinite(lat) or lat < MIN_LATITUDE or lat > MAX_LATITUDE:
        raise ValidationError(
            _("Latitude must be between -90 and 90 degrees"),
            code="invalid_latitude",
        )


def validate_longitude(value):
    """
    Validate that a value is a valid longitude

    Args:
        value: Value to validate

    Raises:
        ValidationError if invalid
    """
    try:
        lng = float(value)
    except (ValueError, TypeError):
        raise ValidationError(_("Longitude must be a valid number"), code="invalid_longitude")

    if not math.isfinite(lng) or lng < MIN_LONGITUDE or lng > MAX_LONGITUDE:
        raise ValidationError(
            _("Longitude must be between -180 and 180 degrees"),
            code="invalid_longitude",
        )
