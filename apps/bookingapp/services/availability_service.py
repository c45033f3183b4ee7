# apps/bookingapp/services/availability_service.py
import logging
import time
import uuid
from dataclasses import dataclass
from typing import List, Optional

from apps.geoapp.services.geospatial_query import GeospatialQueryService
from apps.tableapp.models import Table
from apps.tableapp.services.table_query_service import TableQueryService
from apps.tableapp.services.time_slot_service import TimeSlotMatcher
from core.enums import TableStatus
from core.exceptions import (
    InvalidInputException,
    SearchTimeoutException,
    StoreUnavailableException,
)
from core.read_context import ReadContext
from utils.config import booking_setting
from utils.validators import (
    parse_date,
    parse_time,
    validate_party_size,
    validate_reservation_date,
    validate_search_request,
)

from .conflict_detection_service import ConflictDetectionService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailableTable:
    """A bookable table with its location, as returned by a search."""

    table_id: str
    table_number: str
    capacity: int
    seating_category: str
    location_id: str
    location_name: str
    address: str
    latitude: float
    longitude: float
    distance_meters: Optional[float]

    @classmethod
    def from_table(cls, table, distance_meters):
        location = table.location
        return cls(
            table_id=str(table.id),
            table_number=table.table_number,
            capacity=table.capacity,
            seating_category=table.seating_category,
            location_id=str(location.id),
            location_name=location.name,
            address=location.address,
            latitude=location.latitude,
            longitude=location.longitude,
            distance_meters=distance_meters,
        )


class AvailabilityService:
    """
    Answers "which tables can I book near here, at this date and time, for
    this many people?"

    The search narrows candidates in four stages, each feeding the next:
    1. locations within the radius
    2. locations whose time slots accept the party at that time
    3. free, active tables of sufficient capacity (and seating, if asked)
    4. tables without a blackout or a reservation at the exact slot

    Nothing is cached; every call reads the current store state through the
    given ReadContext.
    """

    @classmethod
    def search_available(
        cls,
        latitude,
        longitude,
        radius_meters,
        target_date,
        target_time,
        party_size,
        seating_category=None,
        ctx: Optional[ReadContext] = None,
        allow_past_dates=None,
    ) -> List[AvailableTable]:
        """
        Find bookable tables near a point for a given slot and party size.

        Args:
            latitude, longitude: Search point
            radius_meters: Search radius, up to MAX_SEARCH_RADIUS_METERS
            target_date: date or "YYYY-MM-DD"
            target_time: time or "HH:MM"
            party_size: Number of guests
            seating_category: Optional seating preference, case-insensitive
            ctx: ReadContext; defaults to SEARCH_TIMEOUT_SECONDS from now
            allow_past_dates: Override for the past-date check

        Returns:
            List of AvailableTable sorted by distance, then table number.
            An empty list means nothing is available.

        Raises:
            InvalidInputException: before any store read
            StoreUnavailableException: a store read failed
            SearchTimeoutException: the deadline passed or the caller cancelled
        """
        request = validate_search_request(
            latitude,
            longitude,
            radius_meters,
            target_date,
            target_time,
            party_size,
            seating_category,
            allow_past_dates=allow_past_dates,
        )
        if ctx is None:
            ctx = ReadContext.with_timeout(booking_setting("SEARCH_TIMEOUT_SECONDS"))

        started = time.monotonic()
        try:
            locations = GeospatialQueryService.find_locations_within_radius(
                request.latitude, request.longitude, request.radius_meters, ctx
            )
            distances = {str(location.id): location.distance_meters for location in locations}

            eligible_ids = TimeSlotMatcher.match_eligible_locations(
                [location.id for location in locations],
                request.target_date,
                request.target_time,
                request.party_size,
                ctx=ctx,
                # the date was already checked against today above
                allow_past_dates=True,
            )

            tables = TableQueryService.find_candidate_tables(
                eligible_ids, request.party_size, request.seating_category, ctx
            )

            free_tables = ConflictDetectionService.exclude_conflicts(
                tables, request.target_date, request.target_time, ctx
            )
        except SearchTimeoutException as e:
            logger.warning(f"Availability search timed out during {e.stage}")
            raise
        except StoreUnavailableException as e:
            logger.error(f"Availability search failed during {e.stage}: {str(e.cause)}")
            raise

        results = sorted(
            (
                AvailableTable.from_table(table, distances.get(str(table.location_id)))
                for table in free_tables
            ),
            key=lambda item: (item.distance_meters, item.location_name, item.table_number),
        )

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(
            f"Availability search {request.target_date} {request.target_time:%H:%M} "
            f"party={request.party_size} r={request.radius_meters:g}m: "
            f"{len(locations)} locations, {len(eligible_ids)} open, "
            f"{len(tables)} tables, {len(results)} available ({elapsed_ms:.1f}ms)"
        )
        return results

    @classmethod
    def is_table_available(cls, table_id, target_date, target_time, party_size, ctx=None, allow_past_dates=None):
        """
        Re-check a single table right before a booking is written.

        Read-only; the caller's write transaction is responsible for holding
        the slot once it commits.
        """
        try:
            table_id = uuid.UUID(str(table_id))
        except ValueError:
            raise InvalidInputException("Invalid table ID", field="table_id")
        target_date = validate_reservation_date(parse_date(target_date), allow_past_dates)
        target_time = parse_time(target_time)
        party_size = validate_party_size(party_size)
        if ctx is None:
            ctx = ReadContext.with_timeout(booking_setting("SEARCH_TIMEOUT_SECONDS"))

        with ctx.read("table_query"):
            table = ctx.queryset(Table.objects).select_related("location").filter(id=table_id).first()

        if (
            table is None
            or not table.is_active
            or table.deleted_at is not None
            or table.status != TableStatus.AVAILABLE
            or not table.location.is_active
            or table.capacity < party_size
        ):
            return False

        rules = TimeSlotMatcher.rules_for_location(table.location_id, target_date, ctx)
        if not any(rule.covers(target_time, party_size) for rule in rules):
            return False

        return bool(ConflictDetectionService.exclude_conflicts([table], target_date, target_time, ctx))
