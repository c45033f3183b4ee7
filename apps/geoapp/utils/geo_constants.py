METERS_PER_KM = 1000.0

# Coordinate ranges (WGS 84)
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
