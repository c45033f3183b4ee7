"""
Geospatial algorithms for location-based calculations.

Key components:
- distance: Haversine distance (scalar and numpy-vectorised), bounding boxes
  and radius filtering
"""

from .distance import bounding_box, haversine, haversine_many, points_within_radius

__all__ = [
    "haversine",
    "haversine_many",
    "bounding_box",
    "points_within_radius",
]
