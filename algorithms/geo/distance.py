"""
Haversine distance calculation between geographic coordinates.

This module provides functions for calculating distances between geographical
points using the Haversine formula, which accounts for the Earth's curvature,
plus the bounding box used to prefilter radius searches in SQL.
"""

import math
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


class BoundingBox(NamedTuple):
    """Latitude range plus one or two longitude ranges (two when crossing ±180°)."""

    min_lat: float
    max_lat: float
    lng_ranges: Tuple[Tuple[float, float], ...]


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points
    on the earth using the Haversine formula.

    Args:
        lat1: Latitude of point 1 (in degrees)
        lon1: Longitude of point 1 (in degrees)
        lat2: Latitude of point 2 (in degrees)
        lon2: Longitude of point 2 (in degrees)

    Returns:
        Distance in kilometers between the two points
    """
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlon = lon2_rad - lon1_rad
    dlat = lat2_rad - lat1_rad

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return EARTH_RADIUS_KM * c


def haversine_many(
    lat: float, lon: float, lats: Sequence[float], lons: Sequence[float]
) -> np.ndarray:
    """
    Vectorised haversine from one point to many.

    Args:
        lat, lon: Origin coordinates (degrees)
        lats, lons: Destination coordinates (degrees), same length

    Returns:
        NumPy array of distances in kilometers
    """
    lat_rad = np.radians(lat)
    lats_rad = np.radians(np.asarray(lats, dtype=float))
    dlat = lats_rad - lat_rad
    dlon = np.radians(np.asarray(lons, dtype=float)) - np.radians(lon)

    a = np.sin(dlat / 2) ** 2 + np.cos(lat_rad) * np.cos(lats_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arcsin(np.minimum(1.0, np.sqrt(a)))

    return EARTH_RADIUS_KM * c


def points_within_radius(
    center: Tuple[float, float],
    points: List[Tuple[float, float]],
    radius_km: float,
) -> List[Tuple[int, float]]:
    """
    Find all points within a given radius of a center point.

    Args:
        center: (latitude, longitude) of the center
        points: List of (latitude, longitude) tuples
        radius_km: Radius in kilometers (inclusive)

    Returns:
        List of tuples (index of point, distance in km), sorted by distance
    """
    if not points:
        return []

    lats, lons = zip(*points)
    distances = haversine_many(center[0], center[1], lats, lons)
    matches = np.nonzero(distances <= radius_km)[0]

    results = [(int(i), float(distances[i])) for i in matches]
    results.sort(key=lambda x: x[1])

    return results


def bounding_box(lat: float, lon: float, radius_km: float) -> BoundingBox:
    """
    Smallest lat/lng box containing every point within ``radius_km`` of (lat, lon).

    The box is a superset used to narrow a SQL query before the exact
    haversine check. Near a pole the longitude bound is dropped; across the
    antimeridian the longitude range is split in two.
    """
    angular = radius_km / EARTH_RADIUS_KM
    delta_lat = math.degrees(angular)
    min_lat = lat - delta_lat
    max_lat = lat + delta_lat

    if min_lat <= -90.0 or max_lat >= 90.0:
        return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), ((-180.0, 180.0),))

    ratio = math.sin(angular) / math.cos(math.radians(lat))
    if ratio >= 1.0:
        return BoundingBox(min_lat, max_lat, ((-180.0, 180.0),))

    delta_lon = math.degrees(math.asin(ratio))
    min_lon = lon - delta_lon
    max_lon = lon + delta_lon

    if min_lon < -180.0:
        ranges = ((min_lon + 360.0, 180.0), (-180.0, max_lon))
    elif max_lon > 180.0:
        ranges = ((min_lon, 180.0), (-180.0, max_lon - 360.0))
    else:
        ranges = ((min_lon, max_lon),)

    return BoundingBox(min_lat, max_lat, ranges)
