"""BaseRouteSegment - Base class for classified route segments.

Provides shared geometry for both slope and vegetation segments:
- Start/end coordinates and the rendering polyline between them
- Distance along the route (always positive)
- Shapely LineString access for map layers
"""

from dataclasses import dataclass

from shapely.geometry import LineString

from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.model.coordinate import Coordinate


@dataclass(frozen=True)
class BaseRouteSegment:
    """Base class for a contiguous, classified piece of a route.

    Attributes:
        start: First coordinate of the segment
        end: Last coordinate of the segment
        distance_m: Distance along the route in meters (> 0)
        coords: Polyline from start to end through every sampled point
    """

    start: Coordinate
    end: Coordinate
    distance_m: float
    coords: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not self.distance_m > 0:
            raise InvalidInputError(f"Segment distance must be positive, got {self.distance_m}")

    def _joined_coords(self, other: "BaseRouteSegment") -> tuple[Coordinate, ...]:
        """Polyline of this segment continued by `other` (shared junction kept once)."""
        return self.coords + other.coords[1:]

    def get_linestring(self) -> LineString:
        """Get Shapely LineString for segment geometry in (lon, lat) order."""
        return LineString([c.lon_lat for c in self.coords])
