"""
Shared enumerations for tables, reservations and scheduling rules.

Every app imports statuses and categories from here instead of repeating
string literals, so enum validation stays in one place.
"""

from datetime import date

from django.db import models
from django.utils.translation import gettext_lazy as _


class TableStatus(models.TextChoices):
    """Operational status of a table"""

    AVAILABLE = "AVAILABLE", _("Available")
    RESERVED = "RESERVED", _("Reserved")
    OCCUPIED = "OCCUPIED", _("Occupied")
    MAINTENANCE = "MAINTENANCE", _("Maintenance")
    INACTIVE = "INACTIVE", _("Inactive")


class SeatingCategory(models.TextChoices):
    """Where a table sits, also used as the customer's seating preference"""

    INDOOR = "INDOOR", _("Indoor")
    OUTDOOR = "OUTDOOR", _("Outdoor")
    ROOFTOP = "ROOFTOP", _("Rooftop")
    BALCONY = "BALCONY", _("Balcony")
    WINDOW = "WINDOW", _("Window")
    BOOTH = "BOOTH", _("Booth")
    HIGH_TOP = "HIGH_TOP", _("High Top")
    BAR = "BAR", _("Bar")
    LOUNGE = "LOUNGE", _("Lounge")
    PRIVATE = "PRIVATE", _("Private")
    COMMUNAL = "COMMUNAL", _("Communal")


# Seating preference meaning "do not filter by category"
NO_PREFERENCE = "NO_PREFERENCE"


class ReservationStatus(models.TextChoices):
    """Lifecycle status of a reservation"""

    PENDING = "PENDING", _("Pending")
    CONFIRMED = "CONFIRMED", _("Confirmed")
    SEATED = "SEATED", _("Seated")
    COMPLETED = "COMPLETED", _("Completed")
    CANCELLED = "CANCELLED", _("Cancelled")
    NO_SHOW = "NO_SHOW", _("No Show")


# Statuses whose reservation still holds its slot
BLOCKING_RESERVATION_STATUSES = (
    ReservationStatus.PENDING,
    ReservationStatus.CONFIRMED,
    ReservationStatus.SEATED,
    ReservationStatus.COMPLETED,
)


class DayOfWeek(models.IntegerChoices):
    """Day of week (0=Sunday, 6=Saturday)"""

    SUNDAY = 0, _("Sunday")
    MONDAY = 1, _("Monday")
    TUESDAY = 2, _("Tuesday")
    WEDNESDAY = 3, _("Wednesday")
    THURSDAY = 4, _("Thursday")
    FRIDAY = 5, _("Friday")
    SATURDAY = 6, _("Saturday")


def day_of_week_for(target_date: date) -> int:
    """Map a date to DayOfWeek (Python's weekday() starts at Monday=0)."""
    return (target_date.weekday() + 1) % 7
