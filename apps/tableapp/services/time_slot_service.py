import logging
import sys

from core.enums import day_of_week_for
from core.read_context import ReadContext
from utils.validators import (
    parse_date,
    parse_time,
    validate_party_size,
    validate_reservation_date,
)

from ..models import BookingTimeSlot

logger = logging.getLogger(__name__)


class TimeSlotMatcher:
    """
    Matches a requested (date, time, party size) against locations' weekly
    booking windows.
    """

    @staticmethod
    def match_eligible_locations(
        location_ids,
        target_date,
        target_time,
        party_size,
        ctx=None,
        allow_past_dates=None,
    ):
        """
        Keep the locations that accept a booking at the requested slot.

        A location is eligible when at least one active time slot for the
        date's weekday covers ``target_time`` (bounds inclusive) and
        ``party_size`` (bounds inclusive). Multiple matching slots are not
        merged or ranked.

        Args:
            location_ids: Candidate location IDs
            target_date: Requested date (date or ``YYYY-MM-DD``)
            target_time: Requested time (time or ``HH:MM``)
            party_size: Number of guests, at least 1
            ctx: ReadContext for the store read
            allow_past_dates: Back-office override for dates before today

        Returns:
            The eligible subset of ``location_ids``, in input order, without duplicates
        """
        validate_party_size(party_size, minimum=1, maximum=sys.maxsize)
        target_date = validate_reservation_date(parse_date(target_date), allow_past_dates)
        target_time = parse_time(target_time)
        ctx = ctx or ReadContext()

        unique_ids = list(dict.fromkeys(location_ids))
        if not unique_ids:
            return []

        day_of_week = day_of_week_for(target_date)

        with ctx.read("time_rules"):
            matched = {
                str(location_id)
                for location_id in ctx.queryset(BookingTimeSlot.objects)
                .filter(
                    location_id__in=unique_ids,
                    day_of_week=day_of_week,
                    is_active=True,
                    start_time__lte=target_time,
                    end_time__gte=target_time,
                    min_party_size__lte=party_size,
                    max_party_size__gte=party_size,
                )
                .values_list("location_id", flat=True)
                .distinct()
            }

        eligible = [location_id for location_id in unique_ids if str(location_id) in matched]

        logger.debug(
            f"Time slots on weekday {day_of_week} at {target_time} for {party_size}: "
            f"{len(eligible)}/{len(unique_ids)} locations eligible"
        )
        return eligible

    @staticmethod
    def rules_for_location(location_id, target_date, ctx=None):
        """Active time slots of a location on the weekday of ``target_date``, earliest first."""
        target_date = parse_date(target_date)
        ctx = ctx or ReadContext()

        with ctx.read("time_rules"):
            return list(
                ctx.queryset(BookingTimeSlot.objects)
                .filter(
                    location_id=location_id,
                    day_of_week=day_of_week_for(target_date),
                    is_active=True,
                )
                .order_by("start_time")
            )
