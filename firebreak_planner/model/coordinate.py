"""Coordinate - The fundamental geometry atom for route analysis.

A Coordinate represents a single WGS84 position without altitude.
Drawn route vertices (track points), resampled points and segment
endpoints are all Coordinates.

Used by:
- resample (input and output)
- SlopeSegment / VegetationSegment (endpoints and rendering polyline)
- ElevationProvider / LandcoverProvider (lookup key)
"""

from dataclasses import dataclass
from math import isnan
from typing import Any

from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class Coordinate:
    """A geographic position in decimal degrees.

    Attributes:
        lat: Latitude in decimal degrees (WGS84)
        lon: Longitude in decimal degrees (WGS84)

    Example:
        point = Coordinate(lat=-33.71, lon=150.31)
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if isnan(self.lat) or isnan(self.lon):
            raise InvalidInputError(f"Coordinate cannot be NaN: ({self.lat}, {self.lon})")
        if not -90.0 <= self.lat <= 90.0 or not -180.0 <= self.lon <= 180.0:
            raise InvalidInputError(f"Coordinate out of range: ({self.lat}, {self.lon})")

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON order."""
        return (self.lon, self.lat)

    def distance_to(self, other: "Coordinate") -> float:
        """Calculate haversine distance to another coordinate in meters."""
        return GeoCalculator.haversine_distance_m(
            lat1=self.lat,
            lon1=self.lon,
            lat2=other.lat,
            lon2=other.lon,
        )

    def interpolate(self, other: "Coordinate", ratio: float) -> "Coordinate":
        """Point at `ratio` of the way from this coordinate to `other`."""
        lat, lon = GeoCalculator.interpolate(
            lat1=self.lat,
            lon1=self.lon,
            lat2=other.lat,
            lon2=other.lon,
            ratio=ratio,
        )
        return Coordinate(lat=lat, lon=lon)

    def midpoint(self, other: "Coordinate") -> "Coordinate":
        """Point halfway between this coordinate and `other`."""
        return self.interpolate(other=other, ratio=0.5)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coordinate":
        """Create Coordinate from dictionary with "lat" and "lon" (or "lng") keys."""
        return cls(lat=float(data["lat"]), lon=float(data.get("lon", data.get("lng"))))

    def __repr__(self) -> str:
        return f"Coordinate(lat={self.lat:.6f}, lon={self.lon:.6f})"
