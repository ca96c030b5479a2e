"""SlopeSegment - A contiguous piece of route sharing one slope category.

Created by SlopeAnalyzer: one raw segment per resampled step, then
contiguous steps of the same category are merged.
"""

from dataclasses import dataclass

from firebreak_planner.constants import SlopeConfig
from firebreak_planner.model.base_segment import BaseRouteSegment


@dataclass(frozen=True)
class SlopeSegment(BaseRouteSegment):
    """A route segment classified by slope.

    Inherits start, end, distance_m and coords from BaseRouteSegment.

    Attributes:
        slope_deg: Slope in degrees (distance-weighted average if merged)
        category: "flat", "medium", "steep" or "very_steep"
        start_elevation_m: Elevation at start in meters
        end_elevation_m: Elevation at end in meters
    """

    slope_deg: float
    category: str
    start_elevation_m: float
    end_elevation_m: float

    @property
    def elevation_change_m(self) -> float:
        """Signed elevation change from start to end (positive = uphill)."""
        return self.end_elevation_m - self.start_elevation_m

    @property
    def label(self) -> str:
        """Human-readable category label."""
        return SlopeConfig.CATEGORY_LABELS[self.category]

    def merged_with(self, other: "SlopeSegment") -> "SlopeSegment":
        """Merge a following segment of the same category into a new segment.

        Slope is the distance-weighted average, elevations are this segment's
        start and the other segment's end.
        """
        if other.category != self.category:
            raise ValueError(f"Cannot merge {self.category} segment with {other.category} segment")
        combined_m = self.distance_m + other.distance_m
        return SlopeSegment(
            start=self.start,
            end=other.end,
            distance_m=combined_m,
            coords=self._joined_coords(other),
            slope_deg=(self.slope_deg * self.distance_m + other.slope_deg * other.distance_m) / combined_m,
            category=self.category,
            start_elevation_m=self.start_elevation_m,
            end_elevation_m=other.end_elevation_m,
        )

    def __repr__(self) -> str:
        return f"SlopeSegment({self.category}, {self.slope_deg:.1f}°, {self.distance_m:.0f}m)"
