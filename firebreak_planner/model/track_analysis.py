"""TrackAnalysis - Slope statistics for a whole route."""

from dataclasses import dataclass

from firebreak_planner.model.slope_segment import SlopeSegment


@dataclass(frozen=True)
class TrackAnalysis:
    """Slope-classified segmentation of a route.

    Segments cover the whole route in order without gaps or overlaps, so
    the segment distances and the distribution values both sum to
    total_distance_m.

    Attributes:
        total_distance_m: Sum of segment distances in meters
        segments: Ordered slope segments
        max_slope_deg: Steepest raw step encountered (before merging)
        average_slope_deg: Distance-weighted average slope
        slope_distribution: Category -> meters, every category present
    """

    total_distance_m: float
    segments: tuple[SlopeSegment, ...]
    max_slope_deg: float
    average_slope_deg: float
    slope_distribution: dict[str, float]

    @property
    def terrain_level(self) -> str:
        """Terrain level implied by the steepest step."""
        from firebreak_planner.core.slope_analyzer import derive_terrain_level

        return derive_terrain_level(max_slope_deg=self.max_slope_deg)

    def fraction(self, category: str) -> float:
        """Share of the route (0-1) in a slope category."""
        if self.total_distance_m <= 0:
            return 0.0
        return self.slope_distribution.get(category, 0.0) / self.total_distance_m

    def __repr__(self) -> str:
        return (
            f"TrackAnalysis({len(self.segments)} segments, {self.total_distance_m:.0f}m, "
            f"max {self.max_slope_deg:.1f}°)"
        )
