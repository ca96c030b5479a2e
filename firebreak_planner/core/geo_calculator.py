"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for route analysis:
- Distance calculation (Haversine formula)
- Linear interpolation between two points (in degree space, no bearing)

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use WGS84 spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def interpolate(
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        ratio: float,
    ) -> tuple[float, float]:
        """Linear interpolation between two points.

        Interpolates latitude and longitude independently. For the short steps
        used in route sampling this is indistinguishable from the great circle.

        Args:
            lat1, lon1: Start point (decimal degrees)
            lat2, lon2: End point (decimal degrees)
            ratio: Position along the segment (0 = start, 1 = end)

        Returns:
            Tuple (lat, lon) of the interpolated point.
        """
        return lat1 + (lat2 - lat1) * ratio, lon1 + (lon2 - lon1) * ratio
