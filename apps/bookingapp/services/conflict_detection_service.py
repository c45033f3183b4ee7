"""
Conflict Detection Service

Removes tables that cannot be booked at a requested slot because:
1. their location has a blackout covering the date and time
2. an existing, non-terminal reservation already holds the exact slot

The filter only ever removes tables. Any store failure aborts the whole
call so that a blacked-out or taken table is never reported as free.
"""

import logging
from typing import Iterable, List, Set, Tuple

from django.db.models import Q

from apps.tableapp.models import BookingBlackout, Table
from core.enums import BLOCKING_RESERVATION_STATUSES, day_of_week_for
from core.read_context import ReadContext
from utils.config import booking_setting
from utils.validators import parse_date, parse_time

from ..models import Reservation

logger = logging.getLogger(__name__)


class ConflictDetectionService:
    """Blackout and reservation conflict checks for the availability search"""

    @classmethod
    def blacked_out_location_ids(cls, location_ids, target_date, target_time, ctx=None) -> Set[str]:
        """
        IDs (as strings) of locations closed by a blackout at the given slot.

        One-off blackouts match on the exact date, recurring ones on the
        weekday. A missing start time means "from the start of the day", a
        missing end time "until the end of the day"; both missing is all day.
        """
        ctx = ctx or ReadContext()
        unique_ids = list(dict.fromkeys(location_ids))
        if not unique_ids:
            return set()

        # Django's __week_day lookup counts 1=Sunday .. 7=Saturday
        week_day = day_of_week_for(target_date) + 1

        date_match = Q(is_recurring=False, blackout_date=target_date) | Q(
            is_recurring=True, blackout_date__week_day=week_day
        )
        time_match = (Q(start_time__isnull=True) | Q(start_time__lte=target_time)) & (
            Q(end_time__isnull=True) | Q(end_time__gte=target_time)
        )

        with ctx.read("blackout_rules"):
            return {
                str(location_id)
                for location_id in ctx.queryset(BookingBlackout.objects)
                .filter(location_id__in=unique_ids, is_active=True)
                .filter(date_match)
                .filter(time_match)
                .values_list("location_id", flat=True)
                .distinct()
            }

    @classmethod
    def conflicting_reservation_keys(
        cls, tables: Iterable[Table], target_date, target_time, ctx=None
    ) -> Tuple[Set[str], Set[str]]:
        """
        Find reservations holding the exact (date, time) slot.

        Returns:
            (table IDs held by an assigned reservation,
             location IDs held by an unassigned reservation)

            The second set stays empty when
            UNASSIGNED_RESERVATION_BLOCKS_LOCATION is turned off.
        """
        ctx = ctx or ReadContext()
        tables = list(tables)
        if not tables:
            return set(), set()

        holder = Q(table_id__in=[table.id for table in tables])
        if booking_setting("UNASSIGNED_RESERVATION_BLOCKS_LOCATION"):
            location_ids = list(dict.fromkeys(table.location_id for table in tables))
            holder |= Q(table__isnull=True, location_id__in=location_ids)

        with ctx.read("reservations"):
            rows = list(
                ctx.queryset(Reservation.objects)
                .filter(
                    reservation_date=target_date,
                    reservation_time=target_time,
                    status__in=BLOCKING_RESERVATION_STATUSES,
                    deleted_at__isnull=True,
                )
                .filter(holder)
                .values_list("table_id", "location_id")
            )

        held_tables, held_locations = set(), set()
        for table_id, location_id in rows:
            if table_id is not None:
                held_tables.add(str(table_id))
            else:
                held_locations.add(str(location_id))

        return held_tables, held_locations

    @classmethod
    def exclude_conflicts(cls, tables, target_date, target_time, ctx=None) -> List[Table]:
        """
        Drop tables with a blackout or reservation conflict at the slot.

        Args:
            tables: Candidate Table instances
            target_date: Requested date
            target_time: Requested time
            ctx: ReadContext shared by both store reads

        Returns:
            The conflict-free subset of ``tables`` (order not guaranteed)

        Raises:
            StoreUnavailableException / SearchTimeoutException: nothing is
            returned when either lookup fails
        """
        tables = list(tables)
        if not tables:
            return []

        target_date = parse_date(target_date)
        target_time = parse_time(target_time)
        ctx = ctx or ReadContext()

        blacked_out = cls.blacked_out_location_ids(
            [table.location_id for table in tables], target_date, target_time, ctx
        )
        remaining = [table for table in tables if str(table.location_id) not in blacked_out]
        if not remaining:
            logger.debug(f"All {len(tables)} tables blacked out on {target_date} {target_time}")
            return []

        held_tables, held_locations = cls.conflicting_reservation_keys(
            remaining, target_date, target_time, ctx
        )
        free = [
            table
            for table in remaining
            if str(table.id) not in held_tables and str(table.location_id) not in held_locations
        ]

        logger.debug(
            f"Conflict exclusion on {target_date} {target_time}: {len(tables)} in, "
            f"{len(tables) - len(remaining)} blacked out, {len(remaining) - len(free)} reserved"
        )
        return free
