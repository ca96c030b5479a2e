"""VegetationAnalysis - Vegetation statistics for a whole route."""

from dataclasses import dataclass

from firebreak_planner.model.vegetation_segment import VegetationSegment


@dataclass(frozen=True)
class VegetationAnalysis:
    """Vegetation-classified segmentation of a route.

    Attributes:
        total_distance_m: Sum of segment distances in meters
        segments: Ordered vegetation segments
        predominant_vegetation: Type with the largest cumulative distance
        vegetation_distribution: Vegetation type -> meters, every type present
        overall_confidence: Mean of per-sample confidences (0 if no samples)
    """

    total_distance_m: float
    segments: tuple[VegetationSegment, ...]
    predominant_vegetation: str
    vegetation_distribution: dict[str, float]
    overall_confidence: float

    def fraction(self, vegetation_type: str) -> float:
        """Share of the route (0-1) covered by a vegetation type."""
        if self.total_distance_m <= 0:
            return 0.0
        return self.vegetation_distribution.get(vegetation_type, 0.0) / self.total_distance_m

    def __repr__(self) -> str:
        return (
            f"VegetationAnalysis({len(self.segments)} segments, {self.total_distance_m:.0f}m, "
            f"mostly {self.predominant_vegetation})"
        )
