# apps/tableapp/tests/fixtures.py
from datetime import time, timedelta

from django.utils import timezone

from apps.geoapp.models import Location
from apps.tableapp.models import BookingBlackout, BookingTimeSlot, Table
from core.enums import DayOfWeek, SeatingCategory, TableStatus, day_of_week_for


def next_weekday(day_of_week=DayOfWeek.MONDAY, weeks_ahead=0):
    """The first date after today falling on ``day_of_week`` (0=Sunday)."""
    candidate = timezone.localdate() + timedelta(days=1)
    while day_of_week_for(candidate) != day_of_week:
        candidate += timedelta(days=1)
    return candidate + timedelta(weeks=weeks_ahead)


def create_test_location(name="Test Bistro", latitude=40.7128, longitude=-74.0060, **kwargs):
    defaults = {
        "address_line1": "1 Test Street",
        "city": "New York",
        "postal_code": "10001",
    }
    defaults.update(kwargs)
    return Location.objects.create(name=name, latitude=latitude, longitude=longitude, **defaults)


def create_test_table(location, table_number="T1", capacity=4, **kwargs):
    defaults = {
        "status": TableStatus.AVAILABLE,
        "seating_category": SeatingCategory.INDOOR,
    }
    defaults.update(kwargs)
    return Table.objects.create(
        location=location, table_number=table_number, capacity=capacity, **defaults
    )


def create_test_time_slot(
    location,
    day_of_week=DayOfWeek.MONDAY,
    start_time=time(17, 0),
    end_time=time(22, 0),
    min_party_size=1,
    max_party_size=8,
    **kwargs,
):
    return BookingTimeSlot.objects.create(
        location=location,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        min_party_size=min_party_size,
        max_party_size=max_party_size,
        **kwargs,
    )


def create_test_blackout(location, blackout_date, start_time=None, end_time=None, **kwargs):
    return BookingBlackout.objects.create(
        location=location,
        blackout_date=blackout_date,
        start_time=start_time,
        end_time=end_time,
        **kwargs,
    )
