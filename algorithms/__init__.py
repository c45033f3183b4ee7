"""
Algorithms shared by the TableBooking apps.

- geo: geodesic distance and radius/bounding-box helpers
"""
