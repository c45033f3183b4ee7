# apps/bookingapp/tests/fixtures.py
from datetime import time

from apps.bookingapp.models import Reservation
from apps.tableapp.tests.fixtures import (  # noqa: F401
    create_test_blackout,
    create_test_location,
    create_test_table,
    create_test_time_slot,
    next_weekday,
)
from core.enums import ReservationStatus


def create_test_reservation(
    table=None,
    location=None,
    reservation_date=None,
    reservation_time=time(18, 0),
    party_size=2,
    status=ReservationStatus.CONFIRMED,
    **kwargs,
):
    return Reservation.objects.create(
        location=location or table.location,
        table=table,
        reservation_date=reservation_date or next_weekday(),
        reservation_time=reservation_time,
        party_size=party_size,
        status=status,
        **kwargs,
    )
