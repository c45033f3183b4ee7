import logging

from core.enums import TableStatus
from core.read_context import ReadContext

from ..models import Table

logger = logging.getLogger(__name__)


class TableQueryService:
    """Base table lookups for the availability search"""

    @staticmethod
    def find_candidate_tables(location_ids, party_size, seating_category=None, ctx=None):
        """
        Tables at the given locations that could seat the party.

        Only active, non-deleted tables in AVAILABLE status at active
        locations with ``capacity >= party_size`` are returned. The owning
        location is joined in (``select_related``) so results can be
        presented without another query.

        Args:
            location_ids: Eligible location IDs
            party_size: Number of guests
            seating_category: Optional SeatingCategory value to restrict to
            ctx: ReadContext for the store read

        Returns:
            List of Table instances
        """
        ctx = ctx or ReadContext()
        unique_ids = list(dict.fromkeys(location_ids))
        if not unique_ids:
            return []

        filters = {
            "location_id__in": unique_ids,
            "location__is_active": True,
            "status": TableStatus.AVAILABLE,
            "is_active": True,
            "deleted_at__isnull": True,
            "capacity__gte": party_size,
        }
        if seating_category:
            filters["seating_category"] = seating_category

        with ctx.read("table_query"):
            tables = list(
                ctx.queryset(Table.objects).select_related("location").filter(**filters)
            )

        logger.debug(f"{len(tables)} candidate tables across {len(unique_ids)} locations")
        return tables
