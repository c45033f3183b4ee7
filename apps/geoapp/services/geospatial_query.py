import logging
import math

from django.db.models import Q

from algorithms.geo.distance import bounding_box, points_within_radius
from core.read_context import ReadContext
from utils.validators import validate_coordinates, validate_radius

from ..models import Location
from ..utils.geo_constants import METERS_PER_KM

logger = logging.getLogger(__name__)


class GeospatialQueryService:
    """Service for radius searches over restaurant locations"""

    @staticmethod
    def find_locations_within_radius(latitude, longitude, radius_meters, ctx=None):
        """
        Find every active location within a geodesic radius of a point.

        A bounding box narrows the SQL query; the haversine distance then
        decides membership exactly. Each returned Location carries a
        ``distance_meters`` attribute. Order is not guaranteed.

        Args:
            latitude, longitude: Search point coordinates
            radius_meters: Search radius in meters, must be positive
            ctx: ReadContext with the caller's deadline and DB alias

        Returns:
            List of Location instances

        Raises:
            InvalidInputException: bad coordinates or radius (no store call made)
            StoreUnavailableException: the location table could not be read
            SearchTimeoutException: the deadline passed
        """
        lat, lng = validate_coordinates(latitude, longitude)
        radius = validate_radius(radius_meters, maximum=math.inf)
        ctx = ctx or ReadContext()

        radius_km = radius / METERS_PER_KM
        box = bounding_box(lat, lng, radius_km)

        lng_filter = Q()
        for min_lng, max_lng in box.lng_ranges:
            lng_filter |= Q(longitude__gte=min_lng, longitude__lte=max_lng)

        with ctx.read("spatial_query"):
            candidates = list(
                ctx.queryset(Location.objects)
                .filter(
                    is_active=True,
                    latitude__gte=box.min_lat,
                    latitude__lte=box.max_lat,
                )
                .filter(lng_filter)
            )

        matches = points_within_radius(
            (lat, lng), [location.coordinates for location in candidates], radius_km
        )

        results = []
        for index, distance_km in matches:
            location = candidates[index]
            location.distance_meters = distance_km * METERS_PER_KM
            results.append(location)

        logger.debug(
            f"Spatial query ({lat}, {lng}) r={radius}m: "
            f"{len(candidates)} in bounding box, {len(results)} within radius"
        )
        return results
